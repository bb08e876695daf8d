"""
FormPilot Form Definition Models

A form definition is the declarative schema of one comparison category:
sections of fields, each field optionally carrying validation rules,
options, a show-when predicate and a subsection used to derive wizard
steps.

Definitions are loaded from YAML/JSON at runtime (see formpilot.definitions)
and treated as immutable for the lifetime of a wizard session.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Union

from .enums import FieldType


# Field name -> current value, as supplied by the caller on every evaluation
FormValues = Mapping[str, Any]


# =============================================================================
# Field Building Blocks
# =============================================================================

@dataclass
class FieldValidation:
    """
    Generic validation rules for a field.

    `pattern` may be a regular expression string or an opaque object; only
    strings are evaluated.
    """
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Union[str, dict[str, Any]]] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        if self.min_length is not None:
            data["minLength"] = self.min_length
        if self.max_length is not None:
            data["maxLength"] = self.max_length
        if self.pattern is not None:
            data["pattern"] = self.pattern
        return data


@dataclass
class FieldOption:
    """A selectable choice of a select/radio/card field."""
    value: str
    label: str
    icon: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"value": self.value, "label": self.label}
        if self.icon is not None:
            data["icon"] = self.icon
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass
class ShowWhen:
    """
    Visibility predicate over another field's current value.

    Exactly one of `equals` / `in_values` is expected. A predicate with
    neither is treated as always satisfied.
    """
    field: str
    equals: Optional[Union[str, int, float, bool]] = None
    in_values: Optional[list[Union[str, int, float, bool]]] = None

    @property
    def has_equals(self) -> bool:
        return self.equals is not None

    @property
    def has_in(self) -> bool:
        return self.in_values is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"field": self.field}
        if self.equals is not None:
            data["equals"] = self.equals
        if self.in_values is not None:
            data["in"] = list(self.in_values)
        return data


@dataclass
class Subsection:
    """Grouping key used to derive wizard steps."""
    id: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label}


@dataclass
class FieldMask:
    """
    Input mask. In `pattern`, `9` is a digit slot and `A` a letter slot;
    every other character is a literal.
    """
    pattern: str
    placeholder: str = ""
    guide: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "placeholder": self.placeholder,
            "guide": self.guide,
        }


@dataclass
class FieldShortcut:
    """Quick-pick value offered next to a field."""
    value: str
    label: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "label": self.label,
            "description": self.description,
        }


@dataclass
class AutocompleteSpec:
    """Remote suggestion source for autocomplete fields."""
    endpoint: str
    min_length: int = 2
    debounce_ms: int = 300

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "minLength": self.min_length,
            "debounceMs": self.debounce_ms,
        }


# =============================================================================
# Form Field
# =============================================================================

@dataclass
class FormField:
    """
    A single field of a form definition.

    Attributes:
        name: Unique key within the definition (also the value-map key)
        type: Widget/field type
        label: Display label
        required: Whether an empty value is a validation error
        validation: Generic rules (length, range, pattern)
        options: Choices for select-like fields
        show_when: Visibility predicate
        subsection: Wizard step this field belongs to
        mask: Input mask
        shortcuts: Quick-pick values
        autocomplete: Remote suggestion source
    """
    name: str
    type: FieldType
    label: str
    required: bool = False
    validation: Optional[FieldValidation] = None
    options: list[FieldOption] = field(default_factory=list)
    show_when: Optional[ShowWhen] = None
    subsection: Optional[Subsection] = None
    mask: Optional[FieldMask] = None
    shortcuts: list[FieldShortcut] = field(default_factory=list)
    autocomplete: Optional[AutocompleteSpec] = None

    # Display metadata, carried through untouched
    placeholder: Optional[str] = None
    helper_text: Optional[str] = None
    help_text: Optional[str] = None
    example: Optional[str] = None
    tooltip: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FormField requires a name")
        if not isinstance(self.type, FieldType):
            self.type = FieldType(self.type)

    def option_values(self) -> list[str]:
        return [o.value for o in self.options]

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the camelCase document shape."""
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "label": self.label,
            "required": self.required,
        }
        if self.validation is not None:
            data["validation"] = self.validation.to_dict()
        if self.options:
            data["options"] = [o.to_dict() for o in self.options]
        if self.show_when is not None:
            data["showWhen"] = self.show_when.to_dict()
        if self.subsection is not None:
            data["subsection"] = self.subsection.to_dict()
        if self.mask is not None:
            data["mask"] = self.mask.to_dict()
        if self.shortcuts:
            data["shortcuts"] = [s.to_dict() for s in self.shortcuts]
        if self.autocomplete is not None:
            data["autocomplete"] = self.autocomplete.to_dict()
        for key, value in (
            ("placeholder", self.placeholder),
            ("helperText", self.helper_text),
            ("helpText", self.help_text),
            ("example", self.example),
            ("tooltip", self.tooltip),
        ):
            if value is not None:
                data[key] = value
        return data


# =============================================================================
# Sections and Definition
# =============================================================================

@dataclass
class FormSection:
    """A titled group of fields as delivered by the definition source."""
    title: str
    fields: list[FormField] = field(default_factory=list)

    def subsections(self) -> list[Subsection]:
        """Distinct subsections of this section, in first-seen order."""
        seen: dict[str, Subsection] = {}
        for f in self.fields:
            if f.subsection is not None and f.subsection.id not in seen:
                seen[f.subsection.id] = f.subsection
        return list(seen.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "fields": [f.to_dict() for f in self.fields],
            "subsections": [
                {
                    **s.to_dict(),
                    "fieldCount": sum(
                        1 for f in self.fields
                        if f.subsection is not None and f.subsection.id == s.id
                    ),
                }
                for s in self.subsections()
            ],
        }


@dataclass
class FormDefinition:
    """
    The full declarative schema for one comparison category.

    Structural integrity (unique names, resolvable show-when references) is
    checked by formpilot.definitions.check_definition_integrity, which the
    loader runs on every document.
    """
    category: str
    sections: list[FormSection] = field(default_factory=list)
    schema_version: str = "1.0.0"

    @property
    def all_fields(self) -> list[FormField]:
        """All fields, flattened in section order."""
        return [f for section in self.sections for f in section.fields]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.all_fields]

    def get_field(self, name: str) -> Optional[FormField]:
        for f in self.all_fields:
            if f.name == name:
                return f
        return None

    def __iter__(self) -> Iterator[FormField]:
        return iter(self.all_fields)

    def __len__(self) -> int:
        return len(self.all_fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "schema_version": self.schema_version,
            "sections": [s.to_dict() for s in self.sections],
        }
