"""Comparison submission endpoint."""

from fastapi import APIRouter, HTTPException

from api.routes.forms import get_definition
from api.schemas.requests import SubmitRequest
from api.schemas.responses import OfferSummary, SubmitResponse
from formpilot.exceptions import FormIncompleteError, SubmissionError
from formpilot.gateway import ComparisonGateway

router = APIRouter(prefix="/forms", tags=["Comparison"])

# Shared gateway instance (set by main.py)
gateway: ComparisonGateway = None


def set_gateway(g: ComparisonGateway):
    global gateway
    gateway = g


@router.post("/{category}/submit", response_model=SubmitResponse)
def submit_form(category: str, request: SubmitRequest):
    """
    Validate, normalize and submit a completed form to the comparison backend.

    Answers 422 with the error map when fields are invalid, 502 when the
    backend fails.
    """
    definition = get_definition(category)
    try:
        result = gateway.submit_form(
            definition,
            request.values,
            include_user_contract=request.include_user_contract,
            user_contract_id=request.user_contract_id,
        )
    except FormIncompleteError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except SubmissionError as e:
        raise HTTPException(status_code=502, detail=e.to_dict())

    return SubmitResponse(
        session_id=result.session_id,
        category=result.category,
        total_offers=result.total_offers,
        filtered_offers=result.filtered_offers,
        expires_at=result.expires_at,
        offers=[
            OfferSummary(
                id=o.id,
                insurer_name=o.insurer_name,
                offer_title=o.offer_title,
                annual_premium=o.annual_premium,
                monthly_premium=o.monthly_premium,
                rating=o.rating,
                match_score=o.match_score,
                key_features=o.key_features,
            )
            for o in result.offers
        ],
    )
