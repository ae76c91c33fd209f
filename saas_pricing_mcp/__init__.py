"""SaaS pricing intelligence MCP server."""

__version__ = "1.0.0"
