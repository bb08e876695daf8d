"""
FormPilot Models

Data types for the form engine:
- Enums: ComparisonCategory, FieldType, ProgressPolicy
- Form definition: FormDefinition, FormSection, FormField and its parts
- Wizard: WizardStep, WizardState, wizard events, FieldView
- Submission: ComparisonRequest, ComparisonOffer, ComparisonResult
"""
from __future__ import annotations

from .enums import ComparisonCategory, FieldType, ProgressPolicy
from .form import (
    AutocompleteSpec,
    FieldMask,
    FieldOption,
    FieldShortcut,
    FieldValidation,
    FormDefinition,
    FormField,
    FormSection,
    FormValues,
    ShowWhen,
    Subsection,
)
from .submission import ComparisonOffer, ComparisonRequest, ComparisonResult
from .wizard import (
    FieldChanged,
    FieldsPrefilled,
    FieldView,
    NextStep,
    PreviousStep,
    SubmitAttempted,
    WizardEvent,
    WizardReset,
    WizardState,
    WizardStep,
)


__all__ = [
    # Enums
    "ComparisonCategory",
    "FieldType",
    "ProgressPolicy",
    # Form definition
    "AutocompleteSpec",
    "FieldMask",
    "FieldOption",
    "FieldShortcut",
    "FieldValidation",
    "FormDefinition",
    "FormField",
    "FormSection",
    "FormValues",
    "ShowWhen",
    "Subsection",
    # Wizard
    "FieldChanged",
    "FieldsPrefilled",
    "FieldView",
    "NextStep",
    "PreviousStep",
    "SubmitAttempted",
    "WizardEvent",
    "WizardReset",
    "WizardState",
    "WizardStep",
    # Submission
    "ComparisonOffer",
    "ComparisonRequest",
    "ComparisonResult",
]
