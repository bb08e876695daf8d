"""
FormPilot Submission Models

Request sent to the comparison backend and the offers it returns.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ComparisonRequest:
    """Normalized payload ready for the comparison endpoint."""
    category: str
    form_data: dict[str, Any]
    include_user_contract: bool = False
    user_contract_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Wire shape expected by the backend."""
        body: dict[str, Any] = {
            "category": self.category,
            "formData": self.form_data,
            "includeUserContract": self.include_user_contract,
        }
        if self.user_contract_id:
            body["userContractId"] = self.user_contract_id
        return body


@dataclass
class ComparisonOffer:
    """One insurer offer ranked by the backend."""
    id: str
    insurer_name: str
    offer_title: str
    annual_premium: float
    rating: float = 0.0
    match_score: float = 0.0
    key_features: list[str] = field(default_factory=list)
    description: Optional[str] = None
    coverage: dict[str, Any] = field(default_factory=dict)
    exclusions: list[str] = field(default_factory=list)
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)

    @property
    def monthly_premium(self) -> float:
        return round(self.annual_premium / 12, 2)


@dataclass
class ComparisonResult:
    """Successful comparison response."""
    session_id: str
    category: str
    offers: list[ComparisonOffer] = field(default_factory=list)
    total_offers: int = 0
    filtered_offers: int = 0
    expires_at: Optional[str] = None
    user_contract: Optional[ComparisonOffer] = None

    def cheapest(self) -> Optional[ComparisonOffer]:
        if not self.offers:
            return None
        return min(self.offers, key=lambda o: o.annual_premium)
