"""
FormPilot Form Definition Schemas

Pydantic models for validating form definition YAML/JSON documents.

Documents use the camelCase keys of the rendering client (showWhen,
minLength, helperText, ...); the schemas accept both the alias and the
Python attribute name. They map to the dataclasses in formpilot.models.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

FieldTypeValue = Literal[
    "text", "number", "select", "checkbox", "radio", "date",
    "textarea", "card", "slider", "autocomplete", "object",
]

ScalarValue = Union[bool, int, float, str]


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# =============================================================================
# Field Part Schemas
# =============================================================================

class ValidationSchema(_DocumentModel):
    """Generic validation rules of a field."""
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    pattern: Optional[Union[str, dict[str, Any]]] = None


class OptionSchema(_DocumentModel):
    """A choice of a select-like field. Values are always strings."""
    value: str
    label: str
    icon: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def stringify_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("value"), (int, float)):
            data = {**data, "value": str(data["value"])}
        return data


class ShowWhenSchema(_DocumentModel):
    """Visibility predicate. `equals` and `in` are both optional here."""
    field: str = Field(..., min_length=1)
    equals: Optional[ScalarValue] = None
    in_values: Optional[list[ScalarValue]] = Field(None, alias="in")


class SubsectionSchema(_DocumentModel):
    id: str = Field(..., min_length=1)
    label: str


class MaskSchema(_DocumentModel):
    pattern: str
    placeholder: str = ""
    guide: bool = False


class ShortcutSchema(_DocumentModel):
    value: str
    label: str
    description: str = ""


class AutocompleteSchema(_DocumentModel):
    endpoint: str
    min_length: int = Field(2, alias="minLength", ge=0)
    debounce_ms: int = Field(300, alias="debounceMs", ge=0)


# =============================================================================
# Field, Section and Document Schemas
# =============================================================================

class FieldSchema(_DocumentModel):
    """Schema for a single form field."""
    name: str = Field(..., min_length=1)
    type: FieldTypeValue
    label: str
    required: bool = False
    validation: Optional[ValidationSchema] = None
    options: list[OptionSchema] = Field(default_factory=list)
    show_when: Optional[ShowWhenSchema] = Field(None, alias="showWhen")
    subsection: Optional[SubsectionSchema] = None
    mask: Optional[MaskSchema] = None
    shortcuts: list[ShortcutSchema] = Field(default_factory=list)
    autocomplete: Optional[AutocompleteSchema] = None

    placeholder: Optional[str] = None
    helper_text: Optional[str] = Field(None, alias="helperText")
    help_text: Optional[str] = Field(None, alias="helpText")
    example: Optional[str] = None
    tooltip: Optional[str] = None


class SectionSchema(_DocumentModel):
    title: str
    fields: list[FieldSchema] = Field(default_factory=list)


class FormDocumentSchema(_DocumentModel):
    """Root schema of a form definition document."""
    schema_version: str = SCHEMA_VERSION
    category: str = Field(..., min_length=1)
    sections: list[SectionSchema] = Field(default_factory=list)


# =============================================================================
# Validation Functions
# =============================================================================

def validate_form_document(data: dict[str, Any]) -> FormDocumentSchema:
    """
    Validate a form definition dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return FormDocumentSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """True when the document's major schema version matches ours."""
    doc_version = str(data.get("schema_version", SCHEMA_VERSION))
    return doc_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
