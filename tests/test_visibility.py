"""
Tests for FormPilot Visibility Evaluator

Tests cover:
- String coercion used for comparisons
- equals / in predicates
- Missing and None dependency values
- Order-preserving filtering
"""
import pytest

from formpilot.engine.visibility import (
    hidden_field_names,
    is_visible,
    loosely_equal,
    stringify,
    visible_fields,
)
from formpilot.models import FieldType, ShowWhen

from tests.conftest import make_field


# =============================================================================
# String Coercion Tests
# =============================================================================

class TestStringify:
    """Tests for stringify."""

    @pytest.mark.parametrize("value,expected", [
        (True, "true"),
        (False, "false"),
        (None, "null"),
        (2, "2"),
        (2.0, "2"),
        (2.5, "2.5"),
        ("monthly", "monthly"),
        (["a", 1], "a,1"),
    ])
    def test_stringify(self, value, expected):
        assert stringify(value) == expected

    def test_bool_matches_string_literal(self):
        assert loosely_equal(True, "true")
        assert not loosely_equal(False, "true")

    def test_number_matches_string_literal(self):
        assert loosely_equal(1, "1")
        assert loosely_equal(1.0, "1")
        assert loosely_equal("1", 1)

    def test_none_never_matches(self):
        assert not loosely_equal(None, "null")
        assert not loosely_equal(None, None)


# =============================================================================
# Predicate Tests
# =============================================================================

class TestIsVisible:
    """Tests for is_visible."""

    def test_no_show_when_is_visible(self):
        assert is_visible(make_field("firstName"), {})

    def test_equals_match(self):
        f = make_field("maxMonthlyPremium", show_when=ShowWhen(field="paymentFrequency", equals="monthly"))
        assert is_visible(f, {"paymentFrequency": "monthly"})
        assert not is_visible(f, {"paymentFrequency": "annual"})

    def test_equals_checkbox_value(self):
        f = make_field("spouseBirthDate", show_when=ShowWhen(field="hasSpouse", equals="true"))
        assert is_visible(f, {"hasSpouse": True})
        assert not is_visible(f, {"hasSpouse": False})

    def test_equals_number_value(self):
        f = make_field("child2", show_when=ShowWhen(field="numberOfChildren", equals="2"))
        assert is_visible(f, {"numberOfChildren": 2})

    def test_in_match(self):
        f = make_field(
            "workPostalCode",
            show_when=ShowWhen(field="usageType", in_values=["private_work", "private_tours"]),
        )
        assert is_visible(f, {"usageType": "private_tours"})
        assert not is_visible(f, {"usageType": "private_only"})

    def test_in_coerces_elements(self):
        f = make_field("childrenBirthYears", show_when=ShowWhen(field="numberOfChildren", in_values=[1, 2]))
        assert is_visible(f, {"numberOfChildren": "2"})

    def test_missing_dependency_is_hidden(self):
        f = make_field("workPostalCode", show_when=ShowWhen(field="usageType", in_values=["private_work"]))
        assert not is_visible(f, {})
        assert not is_visible(f, None)

    def test_none_dependency_is_hidden(self):
        f = make_field("floor", show_when=ShowWhen(field="housingType", equals="apartment"))
        assert not is_visible(f, {"housingType": None})

    def test_show_when_without_operator_is_visible(self):
        f = make_field("notes", FieldType.TEXTAREA, show_when=ShowWhen(field="usageType"))
        assert is_visible(f, {})

    def test_equals_takes_precedence_over_in(self):
        f = make_field(
            "x",
            show_when=ShowWhen(field="y", equals="a", in_values=["b"]),
        )
        assert is_visible(f, {"y": "a"})
        assert not is_visible(f, {"y": "b"})


class TestVisibleFields:
    """Tests for visible_fields / hidden_field_names."""

    def test_preserves_order(self):
        fields = [
            make_field("a"),
            make_field("b", show_when=ShowWhen(field="a", equals="x")),
            make_field("c"),
        ]
        assert [f.name for f in visible_fields(fields, {"a": "x"})] == ["a", "b", "c"]
        assert [f.name for f in visible_fields(fields, {"a": "z"})] == ["a", "c"]

    def test_hidden_field_names(self):
        fields = [
            make_field("a"),
            make_field("b", show_when=ShowWhen(field="a", equals="x")),
        ]
        assert hidden_field_names(fields, {}) == {"b"}


class TestShippedAutoForm:
    """Visibility rules of the shipped auto form."""

    def test_children_birth_years_follow_children_count(self, auto_definition):
        field = auto_definition.get_field("childrenBirthYears")
        assert field.show_when.in_values == ["1", "2", "3_plus"]
        assert not is_visible(field, {"numberOfChildren": "0"})
        assert is_visible(field, {"numberOfChildren": "2"})
        assert is_visible(field, {"numberOfChildren": "3_plus"})

    def test_budget_field_follows_payment_frequency(self, auto_definition):
        monthly = auto_definition.get_field("maxMonthlyPremium")
        annual = auto_definition.get_field("maxAnnualPremium")
        values = {"paymentFrequency": "monthly"}
        assert is_visible(monthly, values)
        assert not is_visible(annual, values)
