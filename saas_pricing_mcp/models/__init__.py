"""Data models and schemas for the SaaS pricing MCP server."""

from .schemas import (
    ComparePricingInput,
    DiscoverPricingInput,
    ExtractPricingInput,
    ProxyTier,
    ToolDefinition,
    ToolInput,
)

__all__ = [
    "ComparePricingInput",
    "DiscoverPricingInput",
    "ExtractPricingInput",
    "ProxyTier",
    "ToolDefinition",
    "ToolInput",
]
