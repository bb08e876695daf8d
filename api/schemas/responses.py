"""Response schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel


class FormSummary(BaseModel):
    """Form definition summary for listing."""
    category: str
    schema_version: str
    section_count: int
    field_count: int
    step_count: int


class StepSummary(BaseModel):
    """A visible wizard step."""
    id: str
    label: str
    fields: list[str]


class FieldViewOut(BaseModel):
    """A field of the current step, ready to render."""
    field: dict[str, Any]
    value: Any = None
    error: Optional[str] = None


class EvaluateResponse(BaseModel):
    """Wizard state derived from a value snapshot."""
    category: str
    steps: list[StepSummary]
    current_step_index: int
    current_fields: list[FieldViewOut]
    errors: dict[str, str]
    displayed_errors: dict[str, str]
    progress: float
    is_valid: bool
    is_first_step: bool
    is_last_step: bool


class NormalizeResponse(BaseModel):
    """Backend payload built from raw values."""
    category: str
    payload: dict[str, Any]
    dropped_fields: list[str]


class PrefillResponse(BaseModel):
    category: str
    values: dict[str, Any]


class OfferSummary(BaseModel):
    """One ranked offer."""
    id: str
    insurer_name: str
    offer_title: str
    annual_premium: float
    monthly_premium: float
    rating: float
    match_score: float
    key_features: list[str]


class SubmitResponse(BaseModel):
    """Comparison result returned to the client."""
    session_id: str
    category: str
    total_offers: int
    filtered_offers: int
    expires_at: Optional[str] = None
    offers: list[OfferSummary]
