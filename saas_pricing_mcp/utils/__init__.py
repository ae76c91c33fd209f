"""Utility modules for the SaaS pricing MCP server."""

from .actor_client import ActorClient, ExtractionError, ExtractionInvoker

__all__ = ["ActorClient", "ExtractionError", "ExtractionInvoker"]
