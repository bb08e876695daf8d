"""
Tests for FormPilot Form Validator
"""
import pytest

from formpilot.engine.field_validator import FieldValidator, MSG_REQUIRED
from formpilot.engine.form_validator import FormValidator, validate_all

from tests.conftest import TODAY


@pytest.fixture
def validator():
    return FormValidator(field_validator=FieldValidator(today=TODAY))


class TestValidateAll:
    """Tests for validate_all."""

    def test_hidden_required_field_has_no_error(self, validator, usage_definition):
        errors = validator.validate_all(usage_definition.all_fields, {"usageType": "private_only"})
        assert "workPostalCode" not in errors

    def test_revealed_required_field_errors(self, validator, usage_definition):
        errors = validator.validate_all(usage_definition.all_fields, {"usageType": "private_work"})
        assert errors["workPostalCode"] == MSG_REQUIRED

    def test_errors_follow_field_order(self, validator, usage_definition):
        errors = validator.validate_all(usage_definition.all_fields, {"paymentFrequency": "monthly"})
        assert list(errors) == ["usageType", "maxMonthlyPremium"]

    def test_valid_form(self, validator, usage_definition):
        values = {
            "usageType": "private_work",
            "workPostalCode": "92100",
            "paymentFrequency": "monthly",
            "maxMonthlyPremium": 80,
        }
        assert validator.validate_all(usage_definition.all_fields, values) == {}
        assert validator.is_valid(usage_definition.all_fields, values)

    def test_invalid_form(self, validator, usage_definition):
        assert not validator.is_valid(usage_definition.all_fields, {})

    def test_does_not_mutate_values(self, validator, usage_definition):
        values = {"usageType": "private_work"}
        validator.validate_all(usage_definition.all_fields, values)
        assert values == {"usageType": "private_work"}

    def test_shipped_auto_form(self, auto_definition, complete_auto_values):
        assert validate_all(auto_definition.all_fields, complete_auto_values) == {}
