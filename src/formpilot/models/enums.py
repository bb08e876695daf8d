"""
FormPilot Enumerations

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Comparison Categories
# =============================================================================

class ComparisonCategory(str, Enum):
    """Product lines a comparison can be requested for."""
    AUTO = "auto"
    HOME = "home"
    HEALTH = "health"
    LIFE = "life"
    DISABILITY = "disability"


# =============================================================================
# Field Types
# =============================================================================

class FieldType(str, Enum):
    """
    Closed set of field widgets a form definition may declare.

    Rendering dispatches on every member; validation only has bespoke
    rules for NUMBER and DATE.
    """
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    TEXTAREA = "textarea"
    CARD = "card"
    SLIDER = "slider"
    AUTOCOMPLETE = "autocomplete"
    OBJECT = "object"


# =============================================================================
# Progress Policy
# =============================================================================

class ProgressPolicy(str, Enum):
    """Which required fields count towards the progress denominator."""
    ALL_REQUIRED = "all_required"            # Reference behavior
    VISIBLE_REQUIRED = "visible_required"    # Hidden fields do not count
