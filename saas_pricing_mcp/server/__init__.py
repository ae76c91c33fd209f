"""Server module for the SaaS pricing MCP server with stdio transport."""

from .main import PricingToolHandler, UnknownToolError, create_server, run, serve

__all__ = [
    "PricingToolHandler",
    "UnknownToolError",
    "create_server",
    "run",
    "serve",
]
