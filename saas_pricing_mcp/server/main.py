"""MCP server exposing the SaaS pricing tools over stdio."""

import asyncio
import logging
import sys
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool
from pydantic import ValidationError

from .. import __version__
from ..config import Settings, get_settings
from ..models.schemas import ToolDefinition, ToolInput
from ..tools import (
    compare_saas_pricing,
    discover_pricing_page,
    extract_saas_pricing,
    validate_tool_arguments,
)
from ..utils.actor_client import ActorClient, ExtractionError, ExtractionInvoker
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "saas-pricing-mcp"

ToolFunction = Callable[[ExtractionInvoker, Any], Awaitable[str]]

# Tool registry mapping tool names to their implementations
TOOL_REGISTRY: Dict[str, ToolFunction] = {
    "extract_saas_pricing": extract_saas_pricing,
    "compare_saas_pricing": compare_saas_pricing,
    "discover_pricing_page": discover_pricing_page,
}

# Tool definitions for MCP protocol
TOOL_DEFINITIONS: List[ToolDefinition] = [
    ToolDefinition(
        name="extract_saas_pricing",
        description=(
            "Extract pricing data from a SaaS product's pricing page. Returns structured JSON with:\n"
            "- Pricing tiers (Free, Pro, Enterprise, etc.)\n"
            "- Prices normalized to monthly USD\n"
            "- Feature lists per tier\n"
            "- Enterprise/contact-sales detection\n"
            "- Popular/recommended tier identification\n\n"
            "Use this when you need to gather pricing information for competitive analysis, "
            "market research, or answering questions about software costs."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "urls": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "List of SaaS pricing page URLs to extract "
                        "(e.g., ['https://notion.so/pricing', 'https://github.com/pricing'])"
                    ),
                },
                "proxyTier": {
                    "type": "string",
                    "enum": ["datacenter", "residential"],
                    "default": "datacenter",
                    "description": "Proxy quality. Use 'residential' for better success on protected sites.",
                },
                "extractFeatures": {
                    "type": "boolean",
                    "default": True,
                    "description": "Whether to extract feature lists for each tier",
                },
            },
            "required": ["urls"],
        },
    ),
    ToolDefinition(
        name="compare_saas_pricing",
        description=(
            "Compare pricing across multiple SaaS products and return a structured comparison.\n\n"
            "Returns:\n"
            "- Per-product tier summary (tier count, free tier, lowest paid price)\n"
            "- Cheapest and most expensive product by lowest paid price\n"
            "- Products offering a free tier\n"
            "- Optional per-seat monthly and yearly cost for a team\n\n"
            'Ideal for answering questions like "Which project management tool is cheapest for a team of 10?"'
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "urls": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "URLs of SaaS pricing pages to compare",
                },
                "teamSize": {
                    "type": "number",
                    "description": "Optional team size for per-seat pricing calculations",
                },
            },
            "required": ["urls"],
        },
    ),
    ToolDefinition(
        name="discover_pricing_page",
        description=(
            "Find the pricing page URL for a SaaS product given its homepage or any page on the site.\n\n"
            "Useful when you have a product name but don't know the exact pricing URL."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "Homepage or any URL on the SaaS website",
                },
            },
            "required": ["url"],
        },
    ),
]


class UnknownToolError(Exception):
    """Exception raised when a call names a tool the server does not have."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    """Wrap text in a single-item tool result."""
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


class PricingToolHandler:
    """Dispatches tool calls to the pricing tools.

    Every failure is turned into an ``isError`` result here.
    """

    def __init__(self, invoker: ExtractionInvoker):
        """Initialize the handler.

        Args:
            invoker: Extraction invoker shared by all tool calls.
        """
        self.invoker = invoker

    def list_tools(self) -> List[Tool]:
        """Descriptors of every tool the server offers."""
        return [Tool(**definition.model_dump()) for definition in TOOL_DEFINITIONS]

    def _resolve(self, name: str) -> ToolFunction:
        if name not in TOOL_REGISTRY:
            raise UnknownToolError(name)
        return TOOL_REGISTRY[name]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
    ) -> CallToolResult:
        """Validate arguments, run the named tool and wrap its output.

        Args:
            name: Tool name from the request.
            arguments: Raw, untyped tool arguments.

        Returns:
            Tool result; ``isError`` is set for unknown tools, invalid
            arguments and failed extraction runs.
        """
        try:
            tool = self._resolve(name)
        except UnknownToolError as e:
            logger.warning(str(e))
            return text_result(str(e), is_error=True)

        outcome = validate_tool_arguments(name, arguments)
        if not outcome.ok:
            logger.info(f"Rejected {name} call: {outcome.error}")
            return text_result(f"Error: {outcome.error}", is_error=True)

        params: ToolInput = outcome.value
        try:
            text = await tool(self.invoker, params)
        except ExtractionError as e:
            logger.error(f"Tool execution error: {name} - {e}")
            return text_result(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}: {e}")
            return text_result(f"Error: {e}", is_error=True)

        return text_result(text)


def create_server(handler: PricingToolHandler) -> Server:
    """Create the MCP server and register the tool handlers.

    Args:
        handler: Tool handler that serves list and call requests.

    Returns:
        Configured low-level MCP server.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return handler.list_tools()

    # Arguments are checked by PricingToolHandler, not the SDK
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
        return await handler.call_tool(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    """Serve MCP requests on stdin/stdout until the client disconnects."""
    handler = PricingToolHandler(ActorClient.from_settings(settings))
    server = create_server(handler)

    async with stdio_server() as (read_stream, write_stream):
        logger.info("SaaS Pricing MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def run() -> None:
    """Load configuration and run the server.

    Exits with status 1 before serving anything if the configuration is
    invalid, most commonly because APIFY_TOKEN is not set.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        if any(err["loc"] == ("APIFY_TOKEN",) for err in e.errors()):
            logger.error("APIFY_TOKEN environment variable is required")
        else:
            logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(settings)
    logger.info(f"Using actor {settings.APIFY_ACTOR_ID}")

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down SaaS Pricing MCP server")
