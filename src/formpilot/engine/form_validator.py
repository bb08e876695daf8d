"""
FormPilot Form Validator

Aggregates field validation over the fields that are currently visible.
A hidden field never produces an error, even when required and empty.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..models import FormField
from .field_validator import FieldValidator
from .visibility import is_visible


@dataclass
class FormValidator:
    """
    Validates every visible field of a form.

    Usage:
        validator = FormValidator()
        errors = validator.validate_all(definition.all_fields, values)
    """
    field_validator: FieldValidator = field(default_factory=FieldValidator)

    def validate_all(
        self,
        fields: Iterable[FormField],
        values: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, str]:
        """
        Validate all visible fields.

        Returns:
            Field name -> message, in field order; empty when valid
        """
        values = values or {}
        errors: dict[str, str] = {}
        for f in fields:
            if not is_visible(f, values):
                continue
            error = self.field_validator.validate(f, values.get(f.name))
            if error:
                errors[f.name] = error
        return errors

    def is_valid(
        self,
        fields: Iterable[FormField],
        values: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        return not self.validate_all(fields, values)


def validate_all(
    fields: Iterable[FormField],
    values: Optional[Mapping[str, Any]] = None,
) -> dict[str, str]:
    """Validate with the default rule set."""
    return FormValidator().validate_all(fields, values)
