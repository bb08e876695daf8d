"""
FormPilot Form Definition Loader

Loads and validates form definitions from YAML or JSON files.

Converts Pydantic schema models to FormPilot domain models, then checks
the structural integrity the engine relies on.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import (
    ConfigurationError,
    DefinitionLoadError,
    DefinitionNotFoundError,
    DefinitionValidationError,
    DefinitionVersionMismatch,
)
from ..models import (
    AutocompleteSpec,
    FieldMask,
    FieldOption,
    FieldShortcut,
    FieldType,
    FieldValidation,
    FormDefinition,
    FormField,
    FormSection,
    ShowWhen,
    Subsection,
)
from .schema import (
    SCHEMA_VERSION,
    FieldSchema,
    FormDocumentSchema,
    SectionSchema,
    check_schema_version,
    validate_form_document,
)

logger = logging.getLogger(__name__)

DEFINITION_SUFFIXES = (".yaml", ".yml", ".json")


# =============================================================================
# Structural Integrity Validation
# =============================================================================

def check_definition_integrity(definition: FormDefinition, path: str = "") -> None:
    """
    Validate the invariants the engine assumes of a definition.

    Catches:
    - Duplicate field names
    - showWhen referencing a non-existent field, or the field itself
    - showWhen declaring both `equals` and `in`
    - String patterns that are not valid regular expressions

    Raises:
        ConfigurationError: Listing every problem found
    """
    errors: list[str] = []
    names = definition.field_names

    seen: set[str] = set()
    for name in names:
        if name in seen:
            errors.append(f"Duplicate field name: '{name}'")
        seen.add(name)

    for f in definition.all_fields:
        cond = f.show_when
        if cond is not None:
            if cond.field == f.name:
                errors.append(f"Field '{f.name}' showWhen references itself")
            elif cond.field not in seen:
                errors.append(
                    f"Field '{f.name}' showWhen references non-existent field '{cond.field}'"
                )
            if cond.has_equals and cond.has_in:
                errors.append(f"Field '{f.name}' showWhen declares both 'equals' and 'in'")

        pattern = f.validation.pattern if f.validation else None
        if isinstance(pattern, str):
            try:
                re.compile(pattern)
            except re.error as e:
                errors.append(f"Field '{f.name}' has invalid pattern {pattern!r}: {e}")

    if errors:
        path_str = f" in {path}" if path else ""
        raise ConfigurationError(
            message=f"Form definition integrity errors{path_str}",
            details={"errors": errors, "path": path} if path else {"errors": errors},
            category=definition.category,
        )


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_field(schema: FieldSchema) -> FormField:
    """Convert FieldSchema to FormField model."""
    validation = None
    if schema.validation is not None:
        v = schema.validation
        validation = FieldValidation(
            min=v.min,
            max=v.max,
            min_length=v.min_length,
            max_length=v.max_length,
            pattern=v.pattern,
        )

    show_when = None
    if schema.show_when is not None:
        show_when = ShowWhen(
            field=schema.show_when.field,
            equals=schema.show_when.equals,
            in_values=list(schema.show_when.in_values)
            if schema.show_when.in_values is not None else None,
        )

    return FormField(
        name=schema.name,
        type=FieldType(schema.type),
        label=schema.label,
        required=schema.required,
        validation=validation,
        options=[
            FieldOption(value=o.value, label=o.label, icon=o.icon, description=o.description)
            for o in schema.options
        ],
        show_when=show_when,
        subsection=Subsection(id=schema.subsection.id, label=schema.subsection.label)
        if schema.subsection else None,
        mask=FieldMask(
            pattern=schema.mask.pattern,
            placeholder=schema.mask.placeholder,
            guide=schema.mask.guide,
        ) if schema.mask else None,
        shortcuts=[
            FieldShortcut(value=s.value, label=s.label, description=s.description)
            for s in schema.shortcuts
        ],
        autocomplete=AutocompleteSpec(
            endpoint=schema.autocomplete.endpoint,
            min_length=schema.autocomplete.min_length,
            debounce_ms=schema.autocomplete.debounce_ms,
        ) if schema.autocomplete else None,
        placeholder=schema.placeholder,
        helper_text=schema.helper_text,
        help_text=schema.help_text,
        example=schema.example,
        tooltip=schema.tooltip,
    )


def _convert_section(schema: SectionSchema) -> FormSection:
    return FormSection(
        title=schema.title,
        fields=[_convert_field(f) for f in schema.fields],
    )


def _convert_document(schema: FormDocumentSchema) -> FormDefinition:
    """Convert FormDocumentSchema to FormDefinition model."""
    return FormDefinition(
        category=schema.category,
        sections=[_convert_section(s) for s in schema.sections],
        schema_version=schema.schema_version,
    )


# =============================================================================
# Form Definition Loader
# =============================================================================

class FormDefinitionLoader:
    """
    Loads form definitions from YAML or JSON files, one per category.

    Usage:
        loader = FormDefinitionLoader()
        loader.load_directory("forms/")
        definition = loader.get("auto")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject documents with incompatible schema versions
        """
        self.strict_version = strict_version
        self._definitions: dict[str, FormDefinition] = {}

    def load(self, path: Union[str, Path]) -> FormDefinition:
        """
        Load a form definition from a file.

        Raises:
            DefinitionLoadError: If file cannot be read
            DefinitionVersionMismatch: If schema version incompatible
            DefinitionValidationError: If schema validation fails
            ConfigurationError: If structural integrity checks fail
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise DefinitionLoadError(
                message=f"Failed to load form definition: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        definition = self._build(data, str(path))
        self._definitions[definition.category] = definition
        logger.info(
            "Loaded form definition %s (%d fields) from %s",
            definition.category, len(definition), path,
            extra={"category": definition.category},
        )
        return definition

    def load_directory(self, directory: Union[str, Path]) -> list[FormDefinition]:
        """Load every definition file of a directory, in name order."""
        directory = Path(directory)
        if not directory.is_dir():
            raise DefinitionLoadError(
                message=f"Form definition directory not found: {directory}",
                details={"path": str(directory)},
            )
        return [
            self.load(p)
            for p in sorted(directory.iterdir())
            if p.suffix.lower() in DEFINITION_SUFFIXES
        ]

    def _build(self, data: Any, path: str = "") -> FormDefinition:
        if not isinstance(data, dict):
            raise DefinitionValidationError(
                message="Form definition document must be a mapping",
                details={"path": path},
            )

        if self.strict_version and not check_schema_version(data):
            doc_version = data.get("schema_version", "unknown")
            raise DefinitionVersionMismatch(
                message=f"Schema version mismatch: document has {doc_version}, expected {SCHEMA_VERSION}",
                details={
                    "document_version": doc_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            schema = validate_form_document(data)
        except ValidationError as e:
            raise DefinitionValidationError(
                message=f"Form definition validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": path},
            ) from e

        definition = _convert_document(schema)
        check_definition_integrity(definition, path)
        return definition

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def get(self, category: str) -> FormDefinition:
        """Get a loaded definition by category."""
        try:
            return self._definitions[category]
        except KeyError:
            raise DefinitionNotFoundError(
                message=f"No form definition for category '{category}'",
                category=category,
            ) from None

    def find(self, category: str) -> Optional[FormDefinition]:
        return self._definitions.get(category)

    def list_categories(self) -> list[str]:
        """List categories of all loaded definitions."""
        return list(self._definitions.keys())


# =============================================================================
# Convenience Functions
# =============================================================================

def load_definition(path: Union[str, Path]) -> FormDefinition:
    """
    Load a form definition from a file.

    Convenience function that creates a temporary loader.
    """
    return FormDefinitionLoader().load(path)


def load_definition_from_string(
    content: str,
    format: str = "yaml",
    strict_version: bool = True,
) -> FormDefinition:
    """
    Load a form definition from a YAML or JSON string.

    Runs the same version, schema and integrity checks as a file load.
    """
    try:
        data = json.loads(content) if format.lower() == "json" else yaml.safe_load(content)
    except (ValueError, yaml.YAMLError) as e:
        raise DefinitionLoadError(
            message=f"Failed to parse form definition: {e}",
            details={"format": format, "error": str(e)},
        ) from e
    return FormDefinitionLoader(strict_version=strict_version)._build(data)


def definition_from_dict(data: dict[str, Any]) -> FormDefinition:
    """Build a definition from an already-parsed document."""
    return FormDefinitionLoader()._build(data)
