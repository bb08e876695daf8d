"""Request schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class EvaluateRequest(BaseModel):
    """Current wizard snapshot sent by the rendering client."""
    values: dict[str, Any] = Field(default_factory=dict, description="Field name -> current value")
    step_index: int = Field(default=0, ge=0, description="Step the user is on")
    touched: list[str] = Field(default_factory=list, description="Fields the user has edited")
    submit_attempted: bool = Field(default=False, description="Reveal every error")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "values": {"usageType": "private_work", "paymentFrequency": "monthly"},
                    "step_index": 0,
                    "touched": ["usageType"],
                    "submit_attempted": False,
                },
            ]
        }
    }


class NormalizeRequest(BaseModel):
    """Raw values to normalize for the backend."""
    values: dict[str, Any] = Field(default_factory=dict)


class PrefillRequest(BaseModel):
    """User profile used to seed the form."""
    profile: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"profile": {"firstName": "Jean", "gender": "male", "zip": "75001"}},
            ]
        }
    }


class SubmitRequest(BaseModel):
    """Completed form to compare."""
    values: dict[str, Any] = Field(default_factory=dict)
    include_user_contract: bool = Field(default=False)
    user_contract_id: Optional[str] = Field(default=None)
