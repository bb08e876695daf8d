"""
FormPilot Progress Calculator

Share of required fields that currently hold a value, as a percentage
rounded to two decimals.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..models import FormField, ProgressPolicy
from .visibility import is_visible


def is_filled(value: Any) -> bool:
    """A value counts as filled unless it is missing, None or ''."""
    return value is not None and value != ""


def required_fields(fields: Iterable[FormField]) -> list[FormField]:
    return [f for f in fields if f.required]


def progress(
    fields: Iterable[FormField],
    values: Optional[Mapping[str, Any]] = None,
    policy: ProgressPolicy = ProgressPolicy.ALL_REQUIRED,
) -> float:
    """
    Calculate form completion progress.

    Args:
        fields: Every field of the definition
        values: Current form values
        policy: ALL_REQUIRED counts hidden required fields in the
            denominator; VISIBLE_REQUIRED ignores them

    Returns:
        Percentage in [0, 100]; 100 when nothing is required
    """
    values = values or {}
    required = required_fields(fields)
    if policy == ProgressPolicy.VISIBLE_REQUIRED:
        required = [f for f in required if is_visible(f, values)]

    if not required:
        return 100.0

    filled = sum(1 for f in required if is_filled(values.get(f.name)))
    return round(filled / len(required) * 100, 2)
