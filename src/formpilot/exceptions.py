"""
FormPilot Exception Hierarchy

Domain-specific exceptions for the comparison form engine.
All exceptions include error codes for tracking and logging.

Field-level validation problems are NOT exceptions: they are plain
messages in the error map returned by the validators. Exceptions are
reserved for programmer errors (bad form definitions) and for the
submission boundary.

Exception codes follow the pattern: FP_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class FormPilotError(Exception):
    """
    Base exception for all FormPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (FP_*)
        details: Additional context about the error
        category: Comparison category involved, if any
    """
    message: str
    code: str = "FP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    category: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.category:
            parts.append(f"(category: {self.category})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.category:
            result["category"] = self.category
        return result


# =============================================================================
# Form Definition Errors
# =============================================================================

@dataclass
class ConfigurationError(FormPilotError):
    """Form definition is internally inconsistent (programmer error)."""
    code: str = "FP_CONFIGURATION_ERROR"


@dataclass
class DefinitionLoadError(FormPilotError):
    """Failed to read a form definition document."""
    code: str = "FP_DEFINITION_LOAD_ERROR"


@dataclass
class DefinitionValidationError(FormPilotError):
    """Form definition document does not match the schema."""
    code: str = "FP_DEFINITION_VALIDATION_ERROR"


@dataclass
class DefinitionVersionMismatch(FormPilotError):
    """Form definition schema version is not supported."""
    code: str = "FP_DEFINITION_VERSION_MISMATCH"


@dataclass
class DefinitionNotFoundError(FormPilotError):
    """No form definition is registered for the requested category."""
    code: str = "FP_DEFINITION_NOT_FOUND"


# =============================================================================
# Submission Errors
# =============================================================================

@dataclass
class FormIncompleteError(FormPilotError):
    """
    Submission attempted while visible fields still fail validation.

    details["errors"] holds the field -> message map.
    """
    code: str = "FP_FORM_INCOMPLETE"


@dataclass
class SubmissionError(FormPilotError):
    """
    Comparison backend rejected the payload or could not be reached.

    The backend's own error code is used as `code` when it sends one.
    status_code is None for transport failures.
    """
    code: str = "FP_SUBMISSION_ERROR"
    status_code: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result
