"""
FormPilot - Conditional Form Engine for Insurance Comparison Wizards

FormPilot turns a declarative form definition into a multi-step wizard:
which fields are visible, which steps exist, what is invalid, how far
along the user is, and what payload the comparison backend receives.

Core Principle: "The definition declares. FormPilot evaluates. The client renders."

Key Features:
- Category agnostic (auto, home, health, life, disability)
- Show-when visibility with loose string comparison
- Wizard steps derived from field subsections
- Field and form validation with French user-facing messages
- Progress over required fields
- Normalization of heterogeneous input for a strict backend schema
- Profile autofill, input masks and quick-pick shortcuts

Quick Start:
    from formpilot.definitions import load_definition
    from formpilot.engine import WizardEngine
    from formpilot.gateway import ComparisonGateway, GatewayConfig
    from formpilot.models import FieldChanged

    definition = load_definition("forms/auto.yaml")

    engine = WizardEngine(definition)
    state = engine.initial_state()
    state = engine.reduce(state, FieldChanged("usageType", "private_work"))

    if state.is_valid:
        with ComparisonGateway(GatewayConfig.from_env()) as gateway:
            result = gateway.submit_form(definition, state.values)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "FormPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    ComparisonCategory,
    ComparisonRequest,
    ComparisonResult,
    FieldType,
    FormDefinition,
    FormField,
    FormSection,
    ProgressPolicy,
    ShowWhen,
    WizardState,
    WizardStep,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    DataNormalizer,
    FieldValidator,
    FormValidator,
    WizardEngine,
    is_visible,
    normalize,
    progress,
    validate_all,
    visible_steps,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    ConfigurationError,
    FormIncompleteError,
    FormPilotError,
    SubmissionError,
)

__all__ = [
    "__version__",
    # Models
    "ComparisonCategory",
    "ComparisonRequest",
    "ComparisonResult",
    "FieldType",
    "FormDefinition",
    "FormField",
    "FormSection",
    "ProgressPolicy",
    "ShowWhen",
    "WizardState",
    "WizardStep",
    # Engine
    "DataNormalizer",
    "FieldValidator",
    "FormValidator",
    "WizardEngine",
    "is_visible",
    "normalize",
    "progress",
    "validate_all",
    "visible_steps",
    # Exceptions
    "ConfigurationError",
    "FormIncompleteError",
    "FormPilotError",
    "SubmissionError",
]
