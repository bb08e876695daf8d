"""
FormPilot Comparison Gateway

HTTP client for the comparison backend.

Contract:
- One blocking POST per submission, no retry
- Raises SubmissionError on transport failures and non-2xx responses,
  carrying the backend's {code, message} when it sends one
- Accepts both the wrapped {success, data} body and a bare result body
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..engine.form_validator import FormValidator
from ..exceptions import FormIncompleteError, SubmissionError
from ..models import (
    ComparisonOffer,
    ComparisonRequest,
    ComparisonResult,
    FormDefinition,
    FormValues,
)
from .config import GatewayConfig
from .request import build_request

logger = logging.getLogger(__name__)

CALCULATE_PATH = "/comparison/calculate"


# =============================================================================
# Response Schemas
# =============================================================================

class _ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OfferSchema(_ResponseModel):
    id: str
    insurer_name: str = Field(..., alias="insurerName")
    offer_title: str = Field("", alias="offerTitle")
    annual_premium: float = Field(..., alias="annualPremium")
    rating: float = 0.0
    match_score: float = Field(0.0, alias="matchScore")
    key_features: list[str] = Field(default_factory=list, alias="keyFeatures")
    description: Optional[str] = None
    coverage: dict[str, Any] = Field(default_factory=dict)
    exclusions: list[str] = Field(default_factory=list)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)

    def to_model(self) -> ComparisonOffer:
        return ComparisonOffer(
            id=self.id,
            insurer_name=self.insurer_name,
            offer_title=self.offer_title,
            annual_premium=self.annual_premium,
            rating=self.rating,
            match_score=self.match_score,
            key_features=list(self.key_features),
            description=self.description,
            coverage=dict(self.coverage),
            exclusions=list(self.exclusions),
            pros=list(self.pros),
            cons=list(self.cons),
        )


class CalculationSchema(_ResponseModel):
    session_id: str = Field(..., alias="sessionId")
    category: str
    offers: list[OfferSchema] = Field(default_factory=list)
    total_offers: Optional[int] = Field(None, alias="totalOffers")
    filtered_offers: Optional[int] = Field(None, alias="filteredOffers")
    expires_at: Optional[str] = Field(None, alias="expiresAt")
    user_contract: Optional[OfferSchema] = Field(None, alias="userContract")

    def to_model(self) -> ComparisonResult:
        offers = [o.to_model() for o in self.offers]
        return ComparisonResult(
            session_id=self.session_id,
            category=self.category,
            offers=offers,
            total_offers=self.total_offers if self.total_offers is not None else len(offers),
            filtered_offers=self.filtered_offers if self.filtered_offers is not None else len(offers),
            expires_at=self.expires_at,
            user_contract=self.user_contract.to_model() if self.user_contract else None,
        )


def _unwrap(body: Any) -> Any:
    """Strip the {success, data} envelope when present."""
    if isinstance(body, dict) and body.get("success") and "data" in body:
        return body["data"]
    return body


def _backend_error(response: httpx.Response) -> tuple[Optional[str], Optional[str]]:
    """Extract (code, message) from an error body, if it has one."""
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    error = body.get("error", body)
    if isinstance(error, str):
        return None, error
    if not isinstance(error, dict):
        return None, None
    return error.get("code"), error.get("message")


# =============================================================================
# Gateway
# =============================================================================

class ComparisonGateway:
    """
    Submits comparison requests to the core API.

    Usage:
        gateway = ComparisonGateway(GatewayConfig.from_env())
        result = gateway.submit_form(definition, values)
        print(result.cheapest())
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        client: Optional[httpx.Client] = None,
        validator: Optional[FormValidator] = None,
    ):
        self.config = config or GatewayConfig()
        self.validator = validator or FormValidator()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ComparisonGateway":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"
        return headers

    def submit(self, request: ComparisonRequest) -> ComparisonResult:
        """
        POST a request to /comparison/calculate.

        Raises:
            SubmissionError: On network failure, non-2xx status or an
                unreadable response body
        """
        url = f"{self.config.base_url}{CALCULATE_PATH}"
        log_extra = {"category": request.category}
        logger.info("Submitting %s comparison", request.category, extra=log_extra)
        start_time = time.time()

        try:
            response = self._client.post(url, json=request.to_dict(), headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("Comparison request failed: %s", e, extra=log_extra)
            raise SubmissionError(
                message=f"Comparison backend unreachable: {e}",
                code="FP_SUBMISSION_NETWORK_ERROR",
                category=request.category,
            ) from e

        if response.is_error:
            code, message = _backend_error(response)
            logger.warning(
                "Comparison backend returned %d (%s)",
                response.status_code, code or "no code",
                extra=log_extra,
            )
            raise SubmissionError(
                message=message or f"Comparison backend returned HTTP {response.status_code}",
                code=code or "FP_SUBMISSION_ERROR",
                category=request.category,
                status_code=response.status_code,
            )

        try:
            schema = CalculationSchema.model_validate(_unwrap(response.json()))
        except (ValueError, ValidationError) as e:
            raise SubmissionError(
                message="Comparison backend returned an unreadable response",
                code="FP_SUBMISSION_BAD_RESPONSE",
                details={"error": str(e)},
                category=request.category,
                status_code=response.status_code,
            ) from e

        result = schema.to_model()
        logger.info(
            "Comparison %s returned %d offers", result.session_id, len(result.offers),
            extra={**log_extra, "duration_ms": int((time.time() - start_time) * 1000)},
        )
        return result

    def submit_form(
        self,
        definition: FormDefinition,
        values: FormValues,
        include_user_contract: bool = False,
        user_contract_id: Optional[str] = None,
    ) -> ComparisonResult:
        """
        Validate, normalize and submit a completed form.

        Raises:
            FormIncompleteError: If any visible field fails validation
            SubmissionError: If the backend call fails
        """
        errors = self.validator.validate_all(definition.all_fields, values)
        if errors:
            raise FormIncompleteError(
                message=f"{len(errors)} field(s) failed validation",
                details={"errors": errors},
                category=definition.category,
            )
        request = build_request(
            definition,
            values,
            include_user_contract=include_user_contract,
            user_contract_id=user_contract_id,
        )
        return self.submit(request)
