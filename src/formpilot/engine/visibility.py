"""
FormPilot Visibility Evaluator

Decides whether a field is shown given the current form values.

Comparison is loose on purpose: both operands of a show-when predicate are
coerced to strings before comparing, so a checkbox holding True matches a
definition literal "true", and a number input holding 2 matches "2". Saved
definitions rely on this.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional

from ..models import FormField, ShowWhen


# Marker for "dependency has no usable value"
_MISSING = object()


# =============================================================================
# String Coercion
# =============================================================================

def stringify(value: Any) -> str:
    """
    Coerce a value to the string form used for show-when comparisons.

    Booleans become "true"/"false", integral floats drop their fraction
    (2.0 -> "2"), lists are comma-joined and None becomes "null".
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else stringify(v) for v in value)
    return str(value)


def loosely_equal(actual: Any, expected: Any) -> bool:
    """String-coerced equality; a missing or None actual never matches."""
    if actual is _MISSING or actual is None:
        return False
    return stringify(actual) == stringify(expected)


# =============================================================================
# Predicate Evaluation
# =============================================================================

def evaluate_show_when(
    show_when: Optional[ShowWhen],
    values: Mapping[str, Any],
) -> bool:
    """
    Evaluate a show-when predicate against current values.

    `equals` takes precedence over `in`; a predicate with neither holds.
    """
    if show_when is None:
        return True

    actual = values.get(show_when.field, _MISSING) if values else _MISSING

    if show_when.has_equals:
        return loosely_equal(actual, show_when.equals)

    if show_when.has_in:
        if not isinstance(show_when.in_values, (list, tuple)):
            return False
        return any(loosely_equal(actual, candidate) for candidate in show_when.in_values)

    return True


def is_visible(field: FormField, values: Optional[Mapping[str, Any]] = None) -> bool:
    """Check whether a field should be shown for the given values."""
    return evaluate_show_when(field.show_when, values or {})


def visible_fields(
    fields: Iterable[FormField],
    values: Optional[Mapping[str, Any]] = None,
) -> list[FormField]:
    """Filter fields down to the visible ones, preserving order."""
    values = values or {}
    return [f for f in fields if is_visible(f, values)]


def hidden_field_names(
    fields: Iterable[FormField],
    values: Optional[Mapping[str, Any]] = None,
) -> set[str]:
    values = values or {}
    return {f.name for f in fields if not is_visible(f, values)}
