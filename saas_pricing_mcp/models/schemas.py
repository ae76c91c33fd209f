"""Pydantic schemas for tool inputs and MCP tool definitions."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    HttpUrl,
    TypeAdapter,
    ValidationError,
)

ProxyTier = Literal["datacenter", "residential"]

_HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """Accept only absolute http(s) URLs, keeping the caller's text as-is."""
    try:
        _HTTP_URL_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"Invalid url: {e.errors()[0]['msg']}") from None
    return value


WebUrl = Annotated[str, AfterValidator(_check_url)]


# =============================================================================
# Tool Input Models
# =============================================================================


class ToolInput(BaseModel):
    """Base model for tool arguments.

    Strict mode: "true" is not a boolean and "10" is not a number.
    """

    model_config = ConfigDict(strict=True, extra="ignore")


class ExtractPricingInput(ToolInput):
    """Arguments for extract_saas_pricing."""

    urls: List[WebUrl] = Field(min_length=1)
    proxy_tier: ProxyTier = Field("datacenter", alias="proxyTier")
    extract_features: bool = Field(True, alias="extractFeatures")


class ComparePricingInput(ToolInput):
    """Arguments for compare_saas_pricing."""

    urls: List[WebUrl] = Field(min_length=1)
    team_size: Optional[Union[int, FiniteFloat]] = Field(None, alias="teamSize")


class DiscoverPricingInput(ToolInput):
    """Arguments for discover_pricing_page."""

    url: WebUrl


# =============================================================================
# Tool Definitions for MCP
# =============================================================================


class ToolDefinition(BaseModel):
    """MCP tool definition."""

    name: str
    description: str
    inputSchema: Dict[str, Any]
