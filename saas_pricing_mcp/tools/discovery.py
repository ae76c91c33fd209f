"""Formatting of pricing-page discovery results."""

from typing import Any, Dict, Sequence


def format_discovery_message(records: Sequence[Dict[str, Any]], requested_url: str) -> str:
    """Turn a discovery run's records into a one-line answer.

    Only the first record is consulted, even if the actor returned more.

    Example:
        >>> format_discovery_message([{"url": "https://x.com/pricing"}], "https://x.com")
        'Found pricing page: https://x.com/pricing'
        >>> format_discovery_message([], "https://x.com")
        'Could not find pricing page for https://x.com'
    """
    first = records[0] if records else None
    found_url = first.get("url") if isinstance(first, dict) else None

    if found_url:
        return f"Found pricing page: {found_url}"
    return f"Could not find pricing page for {requested_url}"
