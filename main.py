#!/usr/bin/env python3
"""Entry point for the SaaS Pricing Intelligence MCP Server.

This script starts the MCP server on stdio, exposing tools that extract,
compare and discover SaaS pricing through a hosted Apify actor.

Usage:
    python main.py

Environment Variables:
    APIFY_TOKEN: Apify API token (required)
    APIFY_ACTOR_ID: Actor to run (default: apricot_blackberry/saas-pricing-intelligence)
    REQUEST_TIMEOUT: Timeout in seconds for each Apify API request (default: 90)
    LOG_LEVEL: Logging level (default: INFO)

Example:
    APIFY_TOKEN=your_token python main.py
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from saas_pricing_mcp.server.main import run


def main() -> None:
    """Run the MCP server."""
    run()


if __name__ == "__main__":
    main()
