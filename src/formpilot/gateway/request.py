"""
FormPilot Request Builder

Turns the wizard's value map into the payload the comparison backend
accepts.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from ..models import ComparisonRequest, FormDefinition, FormValues
from ..engine.normalizer import OPTIONAL_GUARANTEE_KEYS, normalize

logger = logging.getLogger(__name__)

DEFAULT_SECURITY_EQUIPMENT = ["alarm", "anti_theft"]


def collect_form_data(definition: FormDefinition, values: FormValues) -> dict[str, Any]:
    """Values of declared fields only, without empty strings; None is kept."""
    declared = set(definition.field_names)
    return {
        name: value
        for name, value in values.items()
        if name in declared and value != ""
    }


def _finalize(payload: dict[str, Any]) -> None:
    if not isinstance(payload.get("optionalGuarantees"), dict):
        payload["optionalGuarantees"] = {key: False for key in OPTIONAL_GUARANTEE_KEYS}

    equipment = payload.get("securityEquipment")
    if isinstance(equipment, list):
        return
    payload["securityEquipment"] = list(DEFAULT_SECURITY_EQUIPMENT) if equipment is True else []


def build_request(
    definition: FormDefinition,
    values: FormValues,
    include_user_contract: bool = False,
    user_contract_id: Optional[str] = None,
) -> ComparisonRequest:
    """
    Build the comparison request for a completed form.

    Validation is the caller's concern; see ComparisonGateway.submit_form.
    """
    form_data = collect_form_data(definition, values)
    form_data["saveQuote"] = True

    payload = normalize(definition.category, form_data)
    _finalize(payload)

    logger.debug(
        "Built %s comparison request with %d fields", definition.category, len(payload)
    )
    return ComparisonRequest(
        category=definition.category,
        form_data=payload,
        include_user_contract=include_user_contract,
        user_contract_id=user_contract_id,
    )
