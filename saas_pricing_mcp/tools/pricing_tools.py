"""Pricing tools backed by the hosted extraction actor.

Each tool takes the shared invoker plus its validated input, runs exactly
one actor job and returns the text sent back to the MCP client.
"""

import json
import logging
from typing import Any, Dict

from ..models.schemas import (
    ComparePricingInput,
    DiscoverPricingInput,
    ExtractPricingInput,
)
from ..utils.actor_client import ExtractionInvoker
from .comparison import build_comparison
from .discovery import format_discovery_message

logger = logging.getLogger(__name__)

# Pages the actor may visit beyond the seed URLs
EXTRA_CRAWL_BUDGET = 5
DISCOVERY_CRAWL_BUDGET = 5


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def extraction_options(params: ExtractPricingInput) -> Dict[str, Any]:
    """Actor input for a plain extraction run."""
    return {
        "proxyTier": params.proxy_tier,
        "extractFeatures": params.extract_features,
        "normalizePricing": True,
        "maxRequestsPerCrawl": len(params.urls) + EXTRA_CRAWL_BUDGET,
    }


def comparison_options(params: ComparePricingInput) -> Dict[str, Any]:
    """Actor input for a comparison run.

    Proxy tier and feature extraction are fixed. No crawl cap is sent, so
    the actor applies its own default budget.
    """
    return {
        "proxyTier": "datacenter",
        "extractFeatures": True,
        "normalizePricing": True,
    }


def discovery_options() -> Dict[str, Any]:
    """Actor input for a pricing-page discovery run."""
    return {
        "discoverPricingPage": True,
        "maxRequestsPerCrawl": DISCOVERY_CRAWL_BUDGET,
    }


async def extract_saas_pricing(
    invoker: ExtractionInvoker,
    params: ExtractPricingInput,
) -> str:
    """Extract pricing tiers from one or more SaaS pricing pages.

    Args:
        invoker: Extraction invoker used to run the actor.
        params: Validated tool input.

    Returns:
        Pretty-printed JSON array of the actor's extraction records.

    Raises:
        ExtractionError: If the actor run or dataset fetch fails.
    """
    logger.info(f"Extracting pricing for {len(params.urls)} URL(s) via {params.proxy_tier} proxies")
    items = await invoker.invoke(params.urls, extraction_options(params))
    return _to_json(items)


async def compare_saas_pricing(
    invoker: ExtractionInvoker,
    params: ComparePricingInput,
) -> str:
    """Extract several products and compare their pricing.

    Args:
        invoker: Extraction invoker used to run the actor.
        params: Validated tool input; ``team_size`` enables per-seat cost
            projections.

    Returns:
        Pretty-printed JSON comparison with ``products`` and ``summary``.

    Raises:
        ExtractionError: If the actor run or dataset fetch fails.
    """
    logger.info(f"Comparing pricing for {len(params.urls)} URL(s)")
    items = await invoker.invoke(params.urls, comparison_options(params))

    if len(items) < len(params.urls):
        logger.warning(f"Actor returned {len(items)} records for {len(params.urls)} URLs")

    return _to_json(build_comparison(items, team_size=params.team_size))


async def discover_pricing_page(
    invoker: ExtractionInvoker,
    params: DiscoverPricingInput,
) -> str:
    """Find the pricing page of the site behind ``params.url``."""
    logger.info(f"Discovering pricing page for {params.url}")
    items = await invoker.invoke([params.url], discovery_options())
    return format_discovery_message(items, params.url)
