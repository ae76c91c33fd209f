"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from saas_pricing_mcp.config import Settings
from saas_pricing_mcp.server.main import PricingToolHandler
from saas_pricing_mcp.utils.actor_client import ExtractionError, ExtractionInvoker


class FakeInvoker(ExtractionInvoker):
    """Invoker that records calls and replays canned records."""

    def __init__(self, items: List[Dict[str, Any]] = None, error: str = None):
        self.items = items or []
        self.error = error
        self.calls: List[Tuple[List[str], Dict[str, Any]]] = []

    async def invoke(
        self,
        urls: Sequence[str],
        options: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        self.calls.append((list(urls), dict(options)))
        if self.error:
            raise ExtractionError(self.error)
        return self.items


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings without reading a .env file."""
    return Settings(
        _env_file=None,
        APIFY_TOKEN="test_token",
        APIFY_BASE_URL="https://api.apify.test",
        RUN_WAIT_SECS=1,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Extraction records as the actor writes them to its dataset."""
    return [
        {
            "productName": "Notion",
            "url": "https://www.notion.so/pricing",
            "tiers": [
                {
                    "name": "Free",
                    "pricing": {"type": "free", "perUnit": "user"},
                    "normalizedMonthlyPrice": 0,
                    "features": ["Unlimited blocks for individuals"],
                },
                {
                    "name": "Plus",
                    "pricing": {"type": "paid", "perUnit": "user"},
                    "normalizedMonthlyPrice": 10,
                    "features": ["Unlimited blocks for teams"],
                },
                {
                    "name": "Enterprise",
                    "pricing": {"type": "contact_sales", "perUnit": "user"},
                },
            ],
        },
        {
            "productName": "Linear",
            "url": "https://linear.app/pricing",
            "tiers": [
                {
                    "name": "Basic",
                    "pricing": {"type": "paid", "perUnit": "user"},
                    "normalizedMonthlyPrice": 8,
                },
                {
                    "name": "Business",
                    "pricing": {"type": "paid", "perUnit": "user"},
                    "normalizedMonthlyPrice": 14,
                },
            ],
        },
        {
            "productName": "Plausible",
            "url": "https://plausible.io/pricing",
            "tiers": [
                {
                    "name": "Growth",
                    "pricing": {"type": "paid", "perUnit": "flat"},
                    "normalizedMonthlyPrice": 19,
                },
            ],
        },
    ]


@pytest.fixture
def fake_invoker(sample_records) -> FakeInvoker:
    """Invoker returning the sample records."""
    return FakeInvoker(items=sample_records)


@pytest.fixture
def handler(fake_invoker) -> PricingToolHandler:
    """Tool handler wired to the fake invoker."""
    return PricingToolHandler(fake_invoker)
