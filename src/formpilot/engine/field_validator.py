"""
FormPilot Field Validator

Checks one field value against the field's rules and returns the first
failing message, or None.

Order of checks:
1. Required-and-empty (short-circuits everything else)
2. Empty optional values are accepted without further checks
3. Type rule registered for the field type (number, date)
4. Name rule registered for the field name (email)
5. Generic rules from the `validation` block (length, pattern, range)

Type and name rules are pluggable: pass extra callables to FieldValidator
or register them on an instance.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional, Union

from ..models import FieldType, FormField
from .normalizer import parse_date, parse_number


# =============================================================================
# Messages
# =============================================================================

MSG_REQUIRED = "Ce champ est requis"
MSG_MIN_LENGTH = "Minimum {limit} caractères requis"
MSG_MAX_LENGTH = "Maximum {limit} caractères autorisés"
MSG_PATTERN = "Format invalide"
MSG_MIN_VALUE = "Valeur minimale : {limit}"
MSG_MAX_VALUE = "Valeur maximale : {limit}"
MSG_NOT_A_NUMBER = "Veuillez entrer un nombre valide"
MSG_INVALID_DATE = "Format de date invalide"
MSG_FUTURE_DATE = "La date ne peut pas être dans le futur"
MSG_INVALID_EMAIL = "Veuillez entrer une adresse email valide"

# Fields whose date must not lie after today
BIRTH_DATE_FIELDS: frozenset[str] = frozenset({"birthDate", "spouseBirthDate"})

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# A rule receives the field, the non-empty value and today's date
FieldRule = Callable[[FormField, Any, date], Optional[str]]


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_limit(limit: Union[int, float]) -> str:
    if isinstance(limit, float) and limit.is_integer():
        return str(int(limit))
    return str(limit)


# =============================================================================
# Generic Rules
# =============================================================================

def check_range(field: FormField, number: Union[int, float]) -> Optional[str]:
    """Apply validation.min / validation.max to a number."""
    rules = field.validation
    if rules is None:
        return None
    if rules.min is not None and number < rules.min:
        return MSG_MIN_VALUE.format(limit=_format_limit(rules.min))
    if rules.max is not None and number > rules.max:
        return MSG_MAX_VALUE.format(limit=_format_limit(rules.max))
    return None


def check_text(field: FormField, text: str) -> Optional[str]:
    """Apply length and pattern rules to a string."""
    rules = field.validation
    if rules is None:
        return None
    if rules.min_length is not None and len(text) < rules.min_length:
        return MSG_MIN_LENGTH.format(limit=rules.min_length)
    if rules.max_length is not None and len(text) > rules.max_length:
        return MSG_MAX_LENGTH.format(limit=rules.max_length)
    if isinstance(rules.pattern, str) and rules.pattern:
        if not re.search(rules.pattern, text):
            return MSG_PATTERN
    return None


# =============================================================================
# Type Rules
# =============================================================================

def number_rule(field: FormField, value: Any, today: date) -> Optional[str]:
    """Number inputs may arrive as text; text must parse and respect the range."""
    if not isinstance(value, str):
        return None
    number = parse_number(value)
    if number is None:
        return MSG_NOT_A_NUMBER
    return check_range(field, number)


def date_rule(field: FormField, value: Any, today: date) -> Optional[str]:
    """Dates must parse; birth dates must not be in the future."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return MSG_INVALID_DATE
    parsed = parse_date(value)
    if parsed is None:
        return MSG_INVALID_DATE
    if field.name in BIRTH_DATE_FIELDS and parsed > today:
        return MSG_FUTURE_DATE
    return None


def email_rule(field: FormField, value: Any, today: date) -> Optional[str]:
    if isinstance(value, str) and not _EMAIL.match(value):
        return MSG_INVALID_EMAIL
    return None


DEFAULT_TYPE_RULES: dict[FieldType, FieldRule] = {
    FieldType.NUMBER: number_rule,
    FieldType.DATE: date_rule,
}

DEFAULT_NAME_RULES: dict[str, FieldRule] = {
    "email": email_rule,
}


# =============================================================================
# Field Validator
# =============================================================================

@dataclass
class FieldValidator:
    """
    Validates single field values.

    Usage:
        validator = FieldValidator()
        error = validator.validate(field, value)

    Attributes:
        type_rules: Extra checks dispatched on field type
        name_rules: Extra checks dispatched on field name
        today: Fixed reference date; defaults to the current date per call
    """
    type_rules: dict[FieldType, FieldRule] = field(
        default_factory=lambda: dict(DEFAULT_TYPE_RULES)
    )
    name_rules: dict[str, FieldRule] = field(
        default_factory=lambda: dict(DEFAULT_NAME_RULES)
    )
    today: Optional[date] = None

    def register_type_rule(self, field_type: FieldType, rule: FieldRule) -> None:
        self.type_rules[FieldType(field_type)] = rule

    def register_name_rule(self, field_name: str, rule: FieldRule) -> None:
        self.name_rules[field_name] = rule

    def validate(self, field: FormField, value: Any) -> Optional[str]:
        """
        Validate a value for a field.

        Returns:
            The first error message, or None when the value is acceptable
        """
        if is_empty(value):
            return MSG_REQUIRED if field.required else None

        today = self.today or date.today()

        type_rule = self.type_rules.get(field.type)
        if type_rule is not None:
            error = type_rule(field, value, today)
            if error:
                return error

        name_rule = self.name_rules.get(field.name)
        if name_rule is not None:
            error = name_rule(field, value, today)
            if error:
                return error

        if field.validation is None:
            return None

        if isinstance(value, str):
            return check_text(field, value)
        if _is_number(value):
            return check_range(field, value)
        return None


# =============================================================================
# Convenience Functions
# =============================================================================

def validate_field(
    field: FormField,
    value: Any,
    today: Optional[date] = None,
) -> Optional[str]:
    """Validate with the default rule set."""
    return FieldValidator(today=today).validate(field, value)
