"""
FormPilot Engine

Pure functions over (fields, values):
- Visibility: is_visible, visible_fields
- Steps: build_steps, visible_steps, current_step_index, clamp_step_index
- Progress: progress
- Validation: FieldValidator, FormValidator
- Normalization: DataNormalizer, normalize, normalize_date, map_enum_value
- Wizard: WizardEngine reducer
- Helpers: profile autofill, input masks, field shortcuts

Usage:
    from formpilot.engine import WizardEngine, normalize

    engine = WizardEngine(definition)
    state = engine.initial_state()
    payload = normalize(definition.category, state.values)
"""
from __future__ import annotations

from .field_validator import (
    BIRTH_DATE_FIELDS,
    FieldRule,
    FieldValidator,
    check_range,
    check_text,
    validate_field,
)
from .form_validator import FormValidator, validate_all
from .masking import apply_mask, mask_placeholder, remove_mask, validate_mask
from .normalizer import (
    DATE_FIELDS,
    ENUM_MAPPINGS,
    NORMALIZATION_PROFILES,
    BooleanGroup,
    DataNormalizer,
    DerivedDefault,
    NormalizationProfile,
    NormalizationResult,
    coerce_number,
    map_enum_value,
    normalize,
    normalize_date,
    normalize_report,
    parse_date,
    parse_number,
)
from .prefill import civility_from_gender, match_status_option, prefill_from_profile
from .progress import is_filled, progress, required_fields
from .shortcuts import apply_shortcut, date_shortcuts, field_shortcuts
from .steps import build_steps, clamp_step_index, current_step_index, visible_steps
from .visibility import (
    evaluate_show_when,
    hidden_field_names,
    is_visible,
    loosely_equal,
    stringify,
    visible_fields,
)
from .wizard import WizardEngine, initial_state, reduce

__all__ = [
    # Visibility
    "evaluate_show_when",
    "hidden_field_names",
    "is_visible",
    "loosely_equal",
    "stringify",
    "visible_fields",
    # Steps
    "build_steps",
    "clamp_step_index",
    "current_step_index",
    "visible_steps",
    # Progress
    "is_filled",
    "progress",
    "required_fields",
    # Validation
    "BIRTH_DATE_FIELDS",
    "FieldRule",
    "FieldValidator",
    "FormValidator",
    "check_range",
    "check_text",
    "validate_all",
    "validate_field",
    # Normalization
    "DATE_FIELDS",
    "ENUM_MAPPINGS",
    "NORMALIZATION_PROFILES",
    "BooleanGroup",
    "DataNormalizer",
    "DerivedDefault",
    "NormalizationProfile",
    "NormalizationResult",
    "coerce_number",
    "map_enum_value",
    "normalize",
    "normalize_date",
    "normalize_report",
    "parse_date",
    "parse_number",
    # Wizard
    "WizardEngine",
    "initial_state",
    "reduce",
    # Helpers
    "apply_mask",
    "apply_shortcut",
    "civility_from_gender",
    "date_shortcuts",
    "field_shortcuts",
    "mask_placeholder",
    "match_status_option",
    "prefill_from_profile",
    "remove_mask",
    "validate_mask",
]
