"""
Tests for FormPilot Wizard Step Builder

Tests cover:
- Grouping by subsection in first-seen order
- Fields without a subsection
- Visibility-driven step lists
- Step cursor helpers
"""
import pytest

from formpilot.engine.steps import (
    build_steps,
    clamp_step_index,
    current_step_index,
    visible_steps,
)
from formpilot.models import ShowWhen, Subsection

from tests.conftest import make_field


class TestBuildSteps:
    """Tests for build_steps."""

    def test_groups_in_first_seen_order(self):
        fields = [
            make_field("a", subsection="personal_info"),
            make_field("b", subsection="vehicle"),
            make_field("c", subsection="personal_info"),
        ]
        steps = build_steps(fields)
        assert [s.id for s in steps] == ["personal_info", "vehicle"]
        assert steps[0].field_names == ["a", "c"]
        assert steps[1].field_names == ["b"]

    def test_step_label_from_first_field(self):
        steps = build_steps([make_field("a", subsection="address_info")])
        assert steps[0].label == "Address Info"

    def test_fields_without_subsection_are_dropped(self):
        fields = [make_field("a", subsection="s1"), make_field("orphan")]
        steps = build_steps(fields)
        assert [n for s in steps for n in s.field_names] == ["a"]

    def test_fallback_collects_orphans(self):
        fields = [make_field("orphan"), make_field("a", subsection="s1")]
        steps = build_steps(fields, fallback=Subsection(id="other", label="Autres"))
        assert [s.id for s in steps] == ["other", "s1"]
        assert steps[0].field_names == ["orphan"]

    def test_empty_input(self):
        assert build_steps([]) == []


class TestVisibleSteps:
    """Tests for visible_steps."""

    def test_hidden_only_step_is_removed(self, usage_definition):
        steps = visible_steps(usage_definition.all_fields, {})
        assert [s.id for s in steps] == ["usage", "contract"]

    def test_revealed_step_appears(self, usage_definition):
        steps = visible_steps(usage_definition.all_fields, {"paymentFrequency": "monthly"})
        assert [s.id for s in steps] == ["usage", "contract", "budget"]

    def test_hidden_field_removed_from_step(self, usage_definition):
        steps = visible_steps(usage_definition.all_fields, {"usageType": "private_only"})
        assert steps[0].field_names == ["usageType"]
        steps = visible_steps(usage_definition.all_fields, {"usageType": "private_work"})
        assert steps[0].field_names == ["usageType", "workPostalCode"]


class TestStepCursor:
    """Tests for current_step_index / clamp_step_index."""

    def test_first_incomplete_step(self, usage_definition):
        values = {"usageType": "private_only"}
        steps = visible_steps(usage_definition.all_fields, values)
        assert current_step_index(steps, values) == 1

    def test_all_complete_returns_last(self, usage_definition):
        values = {"usageType": "private_only", "paymentFrequency": "annual"}
        steps = visible_steps(usage_definition.all_fields, values)
        assert current_step_index(steps, values) == len(steps) - 1

    def test_no_steps(self):
        assert current_step_index([], {}) == 0

    @pytest.mark.parametrize("index,expected", [(-3, 0), (0, 0), (1, 1), (7, 1)])
    def test_clamp(self, usage_definition, index, expected):
        steps = visible_steps(usage_definition.all_fields, {})
        assert clamp_step_index(index, steps) == expected

    def test_clamp_without_steps(self):
        assert clamp_step_index(4, []) == 0
