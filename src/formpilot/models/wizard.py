"""
FormPilot Wizard Models

Derived, never-persisted structures produced by the engine:
- WizardStep: ordered group of fields sharing a subsection
- WizardState: one immutable snapshot of a wizard session
- Wizard events consumed by the reducer (formpilot.engine.wizard)
- FieldView: what a renderer needs to draw one control
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .form import FormField


# =============================================================================
# Wizard Step
# =============================================================================

@dataclass
class WizardStep:
    """An ordered group of fields presented together."""
    id: str
    label: str
    fields: list[FormField] = field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def is_complete(self, values: Mapping[str, Any]) -> bool:
        """True when every required field of the step holds a value."""
        return all(
            values.get(f.name) not in (None, "")
            for f in self.fields
            if f.required
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "fields": [f.to_dict() for f in self.fields],
        }


# =============================================================================
# Wizard State
# =============================================================================

@dataclass(frozen=True)
class WizardState:
    """
    Snapshot of a wizard session.

    Everything except `values`, `touched`, `current_step_index` and
    `submit_attempted` is derived and recomputed on each transition.
    """
    values: Mapping[str, Any]
    steps: tuple[WizardStep, ...] = ()
    errors: Mapping[str, str] = field(default_factory=dict)
    progress: float = 0.0
    current_step_index: int = 0
    touched: frozenset[str] = frozenset()
    submit_attempted: bool = False

    def __post_init__(self) -> None:
        # Callers must not be able to mutate a snapshot through its mappings
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))
        object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def current_step(self) -> Optional[WizardStep]:
        if not self.steps:
            return None
        return self.steps[self.current_step_index]

    @property
    def is_first_step(self) -> bool:
        return self.current_step_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_step_index >= len(self.steps) - 1

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def displayed_errors(self) -> dict[str, str]:
        """Errors a renderer should show: touched fields, or all after a submit attempt."""
        if self.submit_attempted:
            return dict(self.errors)
        return {k: v for k, v in self.errors.items() if k in self.touched}

    def to_dict(self) -> dict[str, Any]:
        return {
            "values": dict(self.values),
            "steps": [s.to_dict() for s in self.steps],
            "errors": dict(self.errors),
            "displayed_errors": self.displayed_errors,
            "progress": self.progress,
            "current_step_index": self.current_step_index,
            "touched": sorted(self.touched),
            "submit_attempted": self.submit_attempted,
        }


# =============================================================================
# Wizard Events
# =============================================================================

@dataclass(frozen=True)
class FieldChanged:
    """User edited one field."""
    name: str
    value: Any


@dataclass(frozen=True)
class FieldsPrefilled:
    """Values merged in bulk (profile autofill); does not mark fields touched."""
    values: Mapping[str, Any]


@dataclass(frozen=True)
class NextStep:
    """Move the cursor forward one visible step."""


@dataclass(frozen=True)
class PreviousStep:
    """Move the cursor back one visible step."""


@dataclass(frozen=True)
class SubmitAttempted:
    """User pressed submit; reveals every error."""


@dataclass(frozen=True)
class WizardReset:
    """Discard all values (reset or category change)."""


WizardEvent = Union[
    FieldChanged,
    FieldsPrefilled,
    NextStep,
    PreviousStep,
    SubmitAttempted,
    WizardReset,
]


# =============================================================================
# Rendering Boundary
# =============================================================================

@dataclass
class FieldView:
    """A visible field together with its current value and displayed error."""
    field: FormField
    value: Any = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field.to_dict(),
            "value": self.value,
            "error": self.error,
        }
