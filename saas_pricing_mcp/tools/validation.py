"""Argument validation for the pricing tools.

Validation never raises for bad input. ``validate_tool_arguments`` returns a
``ValidationOutcome`` holding either the parsed model or a
``ToolValidationError`` naming every offending field, so callers can branch
on the outcome before any remote call is made.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import ValidationError

from ..models.schemas import (
    ComparePricingInput,
    DiscoverPricingInput,
    ExtractPricingInput,
    ToolInput,
)

INPUT_MODELS: Dict[str, Type[ToolInput]] = {
    "extract_saas_pricing": ExtractPricingInput,
    "compare_saas_pricing": ComparePricingInput,
    "discover_pricing_page": DiscoverPricingInput,
}


class ToolValidationError(Exception):
    """Tool arguments failed schema validation."""

    def __init__(self, tool_name: str, issues: List[Dict[str, str]]):
        self.tool_name = tool_name
        self.issues = issues
        details = "; ".join(f"{issue['field']}: {issue['message']}" for issue in issues)
        super().__init__(f"Invalid arguments for {tool_name}: {details}")

    @property
    def fields(self) -> List[str]:
        """Paths of the offending fields, in the order pydantic reported them."""
        return [issue["field"] for issue in self.issues]


@dataclass(frozen=True)
class ValidationOutcome:
    """Either a validated tool input or the error explaining why it is not."""

    value: Optional[ToolInput] = None
    error: Optional[ToolValidationError] = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "arguments"


def _issues_from(exc: ValidationError) -> List[Dict[str, str]]:
    return [
        {"field": _field_path(err["loc"]), "message": err["msg"]}
        for err in exc.errors(include_url=False)
    ]


def validate_tool_arguments(
    tool_name: str,
    arguments: Optional[Mapping[str, Any]],
) -> ValidationOutcome:
    """Validate raw tool arguments against the tool's input model.

    Args:
        tool_name: Name of a registered tool.
        arguments: Untyped arguments from the tool call. ``None`` is
            treated as an empty object.

    Returns:
        ValidationOutcome with ``value`` set on success, ``error`` otherwise.

    Raises:
        KeyError: If ``tool_name`` has no input model. Callers are expected
            to reject unknown tools first.
    """
    model = INPUT_MODELS[tool_name]
    raw = {} if arguments is None else arguments
    if isinstance(raw, Mapping) and not isinstance(raw, dict):
        raw = dict(raw)

    try:
        return ValidationOutcome(value=model.model_validate(raw))
    except ValidationError as e:
        return ValidationOutcome(error=ToolValidationError(tool_name, _issues_from(e)))
