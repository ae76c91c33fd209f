"""MCP tools for the SaaS pricing server."""

from .comparison import build_comparison, estimate_team_cost, summarize_product
from .discovery import format_discovery_message
from .pricing_tools import (
    compare_saas_pricing,
    discover_pricing_page,
    extract_saas_pricing,
)
from .validation import ToolValidationError, ValidationOutcome, validate_tool_arguments

__all__ = [
    # Pricing tools
    "extract_saas_pricing",
    "compare_saas_pricing",
    "discover_pricing_page",
    # Comparison
    "build_comparison",
    "summarize_product",
    "estimate_team_cost",
    # Discovery
    "format_discovery_message",
    # Validation
    "validate_tool_arguments",
    "ValidationOutcome",
    "ToolValidationError",
]
