"""
Tests for FormPilot Field Validator

Tests cover:
- Required / empty handling
- Length, pattern and range rules
- Number and date type rules
- Email name rule
- Custom rule registration
"""
import pytest
from datetime import date

from formpilot.engine.field_validator import (
    MSG_FUTURE_DATE,
    MSG_INVALID_DATE,
    MSG_INVALID_EMAIL,
    MSG_NOT_A_NUMBER,
    MSG_PATTERN,
    MSG_REQUIRED,
    FieldValidator,
    validate_field,
)
from formpilot.models import FieldType, FieldValidation

from tests.conftest import TODAY, make_field


@pytest.fixture
def validator():
    return FieldValidator(today=TODAY)


# =============================================================================
# Required Tests
# =============================================================================

class TestRequired:
    """Tests for required/empty handling."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_required_empty(self, validator, value):
        f = make_field("firstName", required=True)
        assert validator.validate(f, value) == MSG_REQUIRED

    @pytest.mark.parametrize("value", [None, ""])
    def test_optional_empty_skips_all_rules(self, validator, value):
        f = make_field("postalCode", validation=FieldValidation(pattern=r"^[0-9]{5}$"))
        assert validator.validate(f, value) is None

    def test_false_checkbox_counts_as_present(self, validator):
        f = make_field("acceptTerms", FieldType.CHECKBOX, required=True)
        assert validator.validate(f, False) is None

    def test_no_validation_block(self, validator):
        assert validator.validate(make_field("city", required=True), "P") is None


# =============================================================================
# Text Rules Tests
# =============================================================================

class TestTextRules:
    """Tests for minLength / maxLength / pattern."""

    def test_min_length(self, validator):
        f = make_field("firstName", validation=FieldValidation(min_length=2, max_length=50))
        assert validator.validate(f, "J") == "Minimum 2 caractères requis"
        assert validator.validate(f, "Jo") is None

    def test_max_length(self, validator):
        f = make_field("firstName", validation=FieldValidation(max_length=5))
        assert validator.validate(f, "Jean-Pierre") == "Maximum 5 caractères autorisés"

    def test_pattern(self, validator):
        f = make_field("postalCode", validation=FieldValidation(pattern=r"^[0-9]{5}$"))
        assert validator.validate(f, "7500") == MSG_PATTERN
        assert validator.validate(f, "75001") is None

    def test_pattern_is_searched(self, validator):
        f = make_field("reference", validation=FieldValidation(pattern=r"[0-9]"))
        assert validator.validate(f, "abc1def") is None

    def test_object_pattern_is_ignored(self, validator):
        f = make_field("x", validation=FieldValidation(pattern={"value": "^a$", "message": "m"}))
        assert validator.validate(f, "zzz") is None

    def test_length_checked_before_pattern(self, validator):
        f = make_field("postalCode", validation=FieldValidation(min_length=5, pattern=r"^[0-9]+$"))
        assert validator.validate(f, "ab") == "Minimum 5 caractères requis"


# =============================================================================
# Number Rules Tests
# =============================================================================

class TestNumberRules:
    """Tests for numeric range and the number type rule."""

    @pytest.fixture
    def premium(self):
        return make_field(
            "maxMonthlyPremium", FieldType.NUMBER,
            validation=FieldValidation(min=10, max=500),
        )

    def test_below_min(self, validator, premium):
        assert validator.validate(premium, 5) == "Valeur minimale : 10"

    def test_above_max(self, validator, premium):
        assert validator.validate(premium, 501) == "Valeur maximale : 500"

    def test_in_range(self, validator, premium):
        assert validator.validate(premium, 10) is None
        assert validator.validate(premium, 499.5) is None

    def test_fractional_limit_message(self, validator):
        f = make_field("rate", FieldType.NUMBER, validation=FieldValidation(min=0.5))
        assert validator.validate(f, 0.1) == "Valeur minimale : 0.5"

    def test_text_not_a_number(self, validator, premium):
        assert validator.validate(premium, "abc") == MSG_NOT_A_NUMBER

    def test_numeric_text_is_range_checked(self, validator, premium):
        assert validator.validate(premium, "600") == "Valeur maximale : 500"
        assert validator.validate(premium, "120") is None

    def test_booleans_are_not_range_checked(self, validator, premium):
        assert validator.validate(premium, True) is None

    def test_range_on_text_field_number(self, validator):
        f = make_field("age", validation=FieldValidation(min=18))
        assert validator.validate(f, 17) == "Valeur minimale : 18"


# =============================================================================
# Date Rules Tests
# =============================================================================

class TestDateRules:
    """Tests for the date type rule."""

    @pytest.mark.parametrize("value", [
        "1990-06-15", "15/06/1990", "06/1990", "March 1990", date(1990, 6, 15),
    ])
    def test_valid_dates(self, validator, value):
        f = make_field("drivingLicenseDate", FieldType.DATE)
        assert validator.validate(f, value) is None

    @pytest.mark.parametrize("value", [
        "not-a-date", "31/02/2020", 12345, "Monday", "may", "1", "12",
    ])
    def test_invalid_dates(self, validator, value):
        f = make_field("drivingLicenseDate", FieldType.DATE)
        assert validator.validate(f, value) == MSG_INVALID_DATE

    def test_future_birth_date(self, validator):
        f = make_field("birthDate", FieldType.DATE, required=True)
        assert validator.validate(f, "2030-01-01") == MSG_FUTURE_DATE
        assert validator.validate(f, "15/06/2024") is None

    def test_future_date_allowed_for_other_fields(self, validator):
        f = make_field("contractStartDate", FieldType.DATE)
        assert validator.validate(f, "2030-01-01") is None


# =============================================================================
# Email and Custom Rules Tests
# =============================================================================

class TestNameRules:
    """Tests for name-dispatched rules and registration."""

    def test_invalid_email(self, validator):
        f = make_field("email", required=True)
        assert validator.validate(f, "jean.dupont") == MSG_INVALID_EMAIL
        assert validator.validate(f, "jean@example") == MSG_INVALID_EMAIL

    def test_valid_email(self, validator):
        f = make_field("email", required=True)
        assert validator.validate(f, "jean.dupont@example.fr") is None

    def test_register_name_rule(self, validator):
        def no_test_names(field, value, today):
            return "Nom refusé" if value == "Test" else None

        validator.register_name_rule("lastName", no_test_names)
        f = make_field("lastName")
        assert validator.validate(f, "Test") == "Nom refusé"
        assert validator.validate(f, "Dupont") is None

    def test_register_type_rule(self, validator):
        validator.register_type_rule(
            FieldType.SLIDER,
            lambda field, value, today: None if value % 1000 == 0 else "Pas de 1000",
        )
        f = make_field("annualMileage", FieldType.SLIDER)
        assert validator.validate(f, 1500) == "Pas de 1000"

    def test_rules_are_per_instance(self, validator):
        validator.register_name_rule("city", lambda field, value, today: "x")
        assert FieldValidator(today=TODAY).validate(make_field("city"), "Paris") is None


class TestValidateField:
    """Tests for the validate_field convenience function."""

    def test_uses_default_rules(self):
        f = make_field("birthDate", FieldType.DATE)
        assert validate_field(f, "2030-01-01", today=TODAY) == MSG_FUTURE_DATE
