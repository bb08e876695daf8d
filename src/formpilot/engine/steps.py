"""
FormPilot Wizard Step Builder

Derives ordered wizard steps from a flat field list using each field's
subsection as the grouping key.

- Step order is the first-seen order of subsection ids
- Field order within a step is the original field order
- Fields without a subsection belong to no step unless a fallback
  subsection is supplied
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..models import FormField, Subsection, WizardStep
from .visibility import visible_fields


def build_steps(
    fields: Iterable[FormField],
    fallback: Optional[Subsection] = None,
) -> list[WizardStep]:
    """
    Group fields into wizard steps by subsection id.

    Args:
        fields: Fields in definition order
        fallback: Subsection that collects fields declaring none. When
            omitted those fields are left out of every step.

    Returns:
        Steps in first-seen subsection order
    """
    steps: dict[str, WizardStep] = {}

    for f in fields:
        subsection = f.subsection or fallback
        if subsection is None:
            continue
        step = steps.get(subsection.id)
        if step is None:
            step = WizardStep(id=subsection.id, label=subsection.label)
            steps[subsection.id] = step
        step.fields.append(f)

    return list(steps.values())


def visible_steps(
    fields: Iterable[FormField],
    values: Optional[Mapping[str, Any]] = None,
    fallback: Optional[Subsection] = None,
) -> list[WizardStep]:
    """Steps built from the currently visible fields, empty steps removed."""
    steps = build_steps(visible_fields(fields, values), fallback=fallback)
    return [s for s in steps if s.fields]


def current_step_index(
    steps: Sequence[WizardStep],
    values: Optional[Mapping[str, Any]] = None,
) -> int:
    """
    Index of the first step that still has an unfilled required field.

    Returns the last index when every step is complete, and 0 when there
    are no steps.
    """
    values = values or {}
    for index, step in enumerate(steps):
        if not step.is_complete(values):
            return index
    return max(len(steps) - 1, 0)


def clamp_step_index(index: int, steps: Sequence[WizardStep]) -> int:
    """Keep a step cursor inside the current list of visible steps."""
    if not steps:
        return 0
    return min(max(index, 0), len(steps) - 1)
