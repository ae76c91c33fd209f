"""Cross-product pricing comparison built from extraction records."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _tiers_of(record: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Tiers of a record, skipping anything that is not a tier object."""
    tiers = record.get("tiers")
    if not isinstance(tiers, list):
        return []
    return [tier for tier in tiers if isinstance(tier, dict)]


def _pricing_of(tier: Dict[str, Any]) -> Dict[str, Any]:
    pricing = tier.get("pricing")
    return pricing if isinstance(pricing, dict) else {}


def _lowest_paid_price(tiers: List[Dict[str, Any]]) -> Optional[Number]:
    paid = [
        tier["normalizedMonthlyPrice"]
        for tier in tiers
        if _is_number(tier.get("normalizedMonthlyPrice")) and tier["normalizedMonthlyPrice"] > 0
    ]
    return min(paid) if paid else None


def summarize_product(record: Dict[str, Any]) -> Dict[str, Any]:
    """Derive the per-product summary for one extraction record.

    Missing or malformed ``tiers``/``pricing`` count as "no data": zero
    tiers, no free tier and no paid price. The original ``tiers`` value is
    passed through untouched.
    """
    tiers = _tiers_of(record)
    raw_tiers = record.get("tiers")

    return {
        "name": record.get("productName"),
        "url": record.get("url"),
        "tierCount": len(raw_tiers) if isinstance(raw_tiers, list) else 0,
        "hasFreeTier": any(_pricing_of(tier).get("type") == "free" for tier in tiers),
        "lowestPaidPrice": _lowest_paid_price(tiers),
        "tiers": raw_tiers,
    }


def estimate_team_cost(record: Dict[str, Any], team_size: Number) -> List[Dict[str, Any]]:
    """Project monthly and yearly cost of every per-seat tier for a team.

    Tiers without a numeric price get ``None`` for both figures.
    """
    estimates = []
    for tier in _tiers_of(record):
        if _pricing_of(tier).get("perUnit") != "user":
            continue

        price = tier.get("normalizedMonthlyPrice")
        monthly = price * team_size if _is_number(price) else None
        estimates.append({
            "tier": tier.get("name"),
            "monthly": monthly,
            "yearly": monthly * 12 if monthly is not None else None,
        })

    return estimates


def build_comparison(
    records: Sequence[Dict[str, Any]],
    team_size: Optional[Number] = None,
) -> Dict[str, Any]:
    """Build a structured comparison across extracted products.

    Args:
        records: Extraction records in the order the actor returned them.
            Each is expected to carry ``productName``, ``url`` and ``tiers``.
        team_size: Optional seat count. When given, every product gets an
            ``estimatedTeamCost`` list for its per-seat tiers. Zero and
            negative values are multiplied through as-is.

    Returns:
        Dictionary containing:
        - products: Per-product summaries, input order preserved
        - summary: ``cheapest`` and ``mostExpensive`` (full product entries
          or None) plus ``withFreeTier`` (product names)

    Example:
        >>> records = [
        ...     {"productName": "A", "url": "https://a.io/pricing",
        ...      "tiers": [{"name": "Pro", "normalizedMonthlyPrice": 10}]},
        ...     {"productName": "B", "url": "https://b.io/pricing",
        ...      "tiers": [{"name": "Team", "normalizedMonthlyPrice": 5}]},
        ... ]
        >>> build_comparison(records)["summary"]["cheapest"]["name"]
        'B'
    """
    products = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"Treating non-object extraction record as empty: {record!r}")
            record = {}

        product = summarize_product(record)
        if team_size is not None:
            product["estimatedTeamCost"] = estimate_team_cost(record, team_size)
        products.append(product)

    # min/max return the first extreme they meet, so ties go to input order
    paid_products = [p for p in products if p["lowestPaidPrice"] is not None]
    cheapest = min(paid_products, key=lambda p: p["lowestPaidPrice"]) if paid_products else None
    most_expensive = max(paid_products, key=lambda p: p["lowestPaidPrice"]) if paid_products else None

    return {
        "products": products,
        "summary": {
            "cheapest": cheapest,
            "mostExpensive": most_expensive,
            "withFreeTier": [p["name"] for p in products if p["hasFreeTier"]],
        },
    }
