"""
FormPilot Wizard Reducer

Runs the whole engine as a pure reducer:

    (state, event) -> new state

Every transition recomputes visible steps, validation errors and progress
from the new value snapshot in one pass, then clamps the step cursor so it
stays valid when earlier answers hide or reveal steps. Nothing is cached
between calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ..models import (
    FieldChanged,
    FieldsPrefilled,
    FieldView,
    FormDefinition,
    NextStep,
    PreviousStep,
    ProgressPolicy,
    Subsection,
    SubmitAttempted,
    WizardEvent,
    WizardReset,
    WizardState,
)
from .form_validator import FormValidator
from .progress import progress
from .steps import clamp_step_index, visible_steps

logger = logging.getLogger(__name__)


@dataclass
class WizardEngine:
    """
    Binds a form definition to the evaluation pipeline.

    Usage:
        engine = WizardEngine(definition)
        state = engine.initial_state()
        state = engine.reduce(state, FieldChanged("usageType", "private_work"))
        for view in engine.field_views(state):
            render(view.field, view.value, view.error)
    """
    definition: FormDefinition
    validator: FormValidator = field(default_factory=FormValidator)
    progress_policy: ProgressPolicy = ProgressPolicy.ALL_REQUIRED
    fallback_subsection: Optional[Subsection] = None

    def evaluate(
        self,
        values: Mapping[str, Any],
        current_step_index: int = 0,
        touched: frozenset[str] = frozenset(),
        submit_attempted: bool = False,
    ) -> WizardState:
        """Build a full state snapshot from values."""
        fields = self.definition.all_fields
        steps = visible_steps(fields, values, fallback=self.fallback_subsection)
        return WizardState(
            values=values,
            steps=tuple(steps),
            errors=self.validator.validate_all(fields, values),
            progress=progress(fields, values, policy=self.progress_policy),
            current_step_index=clamp_step_index(current_step_index, steps),
            touched=touched,
            submit_attempted=submit_attempted,
        )

    def initial_state(self, values: Optional[Mapping[str, Any]] = None) -> WizardState:
        """Fresh session, optionally seeded (e.g. from profile autofill)."""
        return self.evaluate(dict(values or {}))

    def reduce(self, state: WizardState, event: WizardEvent) -> WizardState:
        """Apply one event and return the next state."""
        if isinstance(event, FieldChanged):
            if self.definition.get_field(event.name) is None:
                logger.debug("Value set for undeclared field %r", event.name)
            values = {**state.values, event.name: event.value}
            return self.evaluate(
                values,
                current_step_index=state.current_step_index,
                touched=state.touched | {event.name},
                submit_attempted=state.submit_attempted,
            )

        if isinstance(event, FieldsPrefilled):
            values = {**state.values, **dict(event.values)}
            return self.evaluate(
                values,
                current_step_index=state.current_step_index,
                touched=state.touched,
                submit_attempted=state.submit_attempted,
            )

        if isinstance(event, NextStep):
            if state.is_last_step:
                return state
            return replace(state, current_step_index=state.current_step_index + 1)

        if isinstance(event, PreviousStep):
            if state.is_first_step:
                return state
            return replace(state, current_step_index=state.current_step_index - 1)

        if isinstance(event, SubmitAttempted):
            return replace(state, submit_attempted=True)

        if isinstance(event, WizardReset):
            return self.initial_state()

        raise TypeError(f"Unknown wizard event: {event!r}")

    def field_views(self, state: WizardState) -> list[FieldView]:
        """Render data for the fields of the current step."""
        step = state.current_step
        if step is None:
            return []
        displayed = state.displayed_errors
        return [
            FieldView(field=f, value=state.values.get(f.name), error=displayed.get(f.name))
            for f in step.fields
        ]


def initial_state(
    definition: FormDefinition,
    values: Optional[Mapping[str, Any]] = None,
) -> WizardState:
    return WizardEngine(definition).initial_state(values)


def reduce(definition: FormDefinition, state: WizardState, event: WizardEvent) -> WizardState:
    """Apply one event with a default-configured engine."""
    return WizardEngine(definition).reduce(state, event)
