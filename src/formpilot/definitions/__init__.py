"""
FormPilot Form Definitions

Schema validation and loading for form definition documents.

A form definition is a YAML or JSON file declaring the sections and
fields of one comparison category (auto, home, ...), including the
show-when predicates and subsections the wizard is derived from.

Usage:
    from formpilot.definitions import load_definition, FormDefinitionLoader

    # Load a single definition
    definition = load_definition("forms/auto.yaml")

    # Use a loader for a whole directory, keyed by category
    loader = FormDefinitionLoader()
    loader.load_directory("forms/")
    auto = loader.get("auto")
"""
from __future__ import annotations

from .loader import (
    FormDefinitionLoader,
    check_definition_integrity,
    definition_from_dict,
    load_definition,
    load_definition_from_string,
)
from .schema import (
    SCHEMA_VERSION,
    FieldSchema,
    FormDocumentSchema,
    SectionSchema,
    ShowWhenSchema,
    ValidationSchema,
    check_schema_version,
    validate_form_document,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "FormDefinitionLoader",
    "load_definition",
    "load_definition_from_string",
    "definition_from_dict",
    # Validation
    "check_definition_integrity",
    "check_schema_version",
    "validate_form_document",
    # Schemas (for advanced usage)
    "FormDocumentSchema",
    "SectionSchema",
    "FieldSchema",
    "ShowWhenSchema",
    "ValidationSchema",
]
