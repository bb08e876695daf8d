"""
Tests for FormPilot Wizard Reducer

Tests cover:
- Initial state derivation
- Field changes recomputing steps, errors and progress
- Step navigation and cursor clamping
- Error display rules
- Reset and unknown events
"""
import pytest
from dataclasses import dataclass

from formpilot.engine.field_validator import FieldValidator, MSG_REQUIRED
from formpilot.engine.form_validator import FormValidator
from formpilot.engine.wizard import WizardEngine, initial_state, reduce
from formpilot.models import (
    FieldChanged,
    FieldsPrefilled,
    NextStep,
    PreviousStep,
    ProgressPolicy,
    SubmitAttempted,
    WizardReset,
)

from tests.conftest import TODAY


@pytest.fixture
def engine(usage_definition):
    return WizardEngine(
        usage_definition,
        validator=FormValidator(field_validator=FieldValidator(today=TODAY)),
    )


def step_ids(state):
    return [s.id for s in state.steps]


class TestInitialState:
    """Tests for initial_state."""

    def test_empty(self, engine):
        state = engine.initial_state()
        assert step_ids(state) == ["usage", "contract"]
        assert state.current_step_index == 0
        assert state.progress == 0.0
        assert set(state.errors) == {"usageType", "paymentFrequency"}
        assert state.touched == frozenset()
        assert not state.submit_attempted

    def test_seeded(self, engine):
        state = engine.initial_state({"paymentFrequency": "monthly"})
        assert step_ids(state) == ["usage", "contract", "budget"]
        assert state.progress == 25.0

    def test_module_function(self, usage_definition):
        assert step_ids(initial_state(usage_definition)) == ["usage", "contract"]


class TestFieldChanged:
    """Tests for FieldChanged transitions."""

    def test_reveals_step_and_updates_progress(self, engine):
        state = engine.reduce(engine.initial_state(), FieldChanged("paymentFrequency", "monthly"))
        assert step_ids(state) == ["usage", "contract", "budget"]
        assert state.progress == 25.0
        assert state.errors["maxMonthlyPremium"] == MSG_REQUIRED
        assert "paymentFrequency" in state.touched

    def test_previous_state_unchanged(self, engine):
        before = engine.initial_state()
        after = engine.reduce(before, FieldChanged("usageType", "private_work"))
        assert "usageType" not in before.values
        assert after.values["usageType"] == "private_work"

    def test_hidden_required_field_never_errors(self, engine):
        state = engine.reduce(engine.initial_state(), FieldChanged("usageType", "private_only"))
        assert "workPostalCode" not in state.errors
        state = engine.reduce(state, FieldChanged("usageType", "private_work"))
        assert state.errors["workPostalCode"] == MSG_REQUIRED

    def test_undeclared_field_is_stored(self, engine):
        state = engine.reduce(engine.initial_state(), FieldChanged("utm_source", "ads"))
        assert state.values["utm_source"] == "ads"

    def test_visible_required_policy(self, usage_definition):
        engine = WizardEngine(usage_definition, progress_policy=ProgressPolicy.VISIBLE_REQUIRED)
        state = engine.reduce(engine.initial_state(), FieldChanged("usageType", "private_only"))
        assert state.progress == 50.0


class TestPrefill:
    """Tests for FieldsPrefilled."""

    def test_merges_without_touching(self, engine):
        state = engine.reduce(
            engine.initial_state(),
            FieldsPrefilled({"usageType": "private_only", "paymentFrequency": "annual"}),
        )
        assert state.errors == {}
        assert state.touched == frozenset()
        assert state.progress == 50.0


class TestNavigation:
    """Tests for NextStep / PreviousStep and cursor clamping."""

    def test_next_and_previous(self, engine):
        state = engine.reduce(engine.initial_state(), NextStep())
        assert state.current_step_index == 1
        state = engine.reduce(state, PreviousStep())
        assert state.current_step_index == 0

    def test_previous_on_first_step_is_noop(self, engine):
        state = engine.initial_state()
        assert engine.reduce(state, PreviousStep()) is state

    def test_next_on_last_step_is_noop(self, engine):
        state = engine.reduce(engine.initial_state(), NextStep())
        assert state.is_last_step
        assert engine.reduce(state, NextStep()) is state

    def test_cursor_clamped_when_step_disappears(self, engine):
        state = engine.initial_state({"paymentFrequency": "monthly"})
        state = engine.reduce(state, NextStep())
        state = engine.reduce(state, NextStep())
        assert state.current_step.id == "budget"

        state = engine.reduce(state, FieldChanged("paymentFrequency", "annual"))
        assert step_ids(state) == ["usage", "contract"]
        assert state.current_step_index == 1
        assert state.current_step.id == "contract"


class TestErrorDisplay:
    """Tests for displayed_errors and field_views."""

    def test_only_touched_errors_displayed(self, engine):
        state = engine.reduce(engine.initial_state(), FieldChanged("usageType", ""))
        assert state.displayed_errors == {"usageType": MSG_REQUIRED}

    def test_submit_attempt_reveals_all(self, engine):
        state = engine.reduce(engine.initial_state(), SubmitAttempted())
        assert state.submit_attempted
        assert state.displayed_errors == dict(state.errors)
        assert set(state.displayed_errors) == {"usageType", "paymentFrequency"}

    def test_field_views_current_step(self, engine):
        state = engine.reduce(engine.initial_state(), FieldChanged("usageType", "private_work"))
        views = engine.field_views(state)
        assert [v.field.name for v in views] == ["usageType", "workPostalCode"]
        assert views[0].value == "private_work"
        assert views[1].error is None

        state = engine.reduce(state, SubmitAttempted())
        assert engine.field_views(state)[1].error == MSG_REQUIRED

    def test_to_dict(self, engine):
        data = engine.initial_state().to_dict()
        assert data["current_step_index"] == 0
        assert [s["id"] for s in data["steps"]] == ["usage", "contract"]


class TestResetAndErrors:
    """Tests for WizardReset, immutability and unknown events."""

    def test_reset(self, engine):
        state = engine.reduce(engine.initial_state(), FieldChanged("paymentFrequency", "monthly"))
        state = engine.reduce(state, WizardReset())
        assert dict(state.values) == {}
        assert state.touched == frozenset()
        assert step_ids(state) == ["usage", "contract"]

    def test_state_values_are_read_only(self, engine):
        state = engine.initial_state()
        with pytest.raises(TypeError):
            state.values["usageType"] = "private_only"

    def test_unknown_event(self, engine):
        @dataclass(frozen=True)
        class Teleport:
            index: int

        with pytest.raises(TypeError):
            engine.reduce(engine.initial_state(), Teleport(3))

    def test_module_reduce(self, usage_definition):
        state = initial_state(usage_definition)
        state = reduce(usage_definition, state, FieldChanged("usageType", "private_only"))
        assert state.values["usageType"] == "private_only"
