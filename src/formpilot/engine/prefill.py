"""
FormPilot Profile Autofill

Seeds wizard values from the signed-in user's profile, after the user has
consented. Only fields the definition declares are filled, and only with
non-empty values.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..models import FormDefinition, FormField
from .normalizer import normalize_date

logger = logging.getLogger(__name__)


_GENDER_TO_CIVILITY: dict[str, str] = {
    "male": "M.",
    "homme": "M.",
    "m": "M.",
    "female": "Mme",
    "femme": "Mme",
    "f": "Mme",
}

# Keyword families used when no option matches the profile status exactly
_STATUS_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("employee", "salarié", "employé"), "employee"),
    (("student", "étudiant", "etudiant"), "student"),
    (("retired", "retraité", "retraite"), "retired"),
    (("unemployed", "chômeur", "chomeur", "chômage"), "unemployed"),
    (("other", "autre"), "other"),
)


def civility_from_gender(gender: Optional[str]) -> Optional[str]:
    if not gender:
        return None
    return _GENDER_TO_CIVILITY.get(str(gender).lower())


def match_status_option(field: Optional[FormField], status: Optional[str]) -> Optional[str]:
    """
    Find the option value of `field` matching a free-text professional status.

    Exact label/value match wins; otherwise an option whose label and the
    status share a keyword family, and whose value is that family's value.
    """
    if not status or field is None or not field.options:
        return None
    wanted = status.lower()

    for option in field.options:
        if option.label.lower() == wanted or option.value.lower() == wanted:
            return option.value

    for option in field.options:
        label = option.label.lower()
        for keywords, value in _STATUS_KEYWORDS:
            if any(k in label and k in wanted for k in keywords):
                if option.value == value:
                    return option.value
                break
    return None


def prefill_from_profile(
    definition: FormDefinition,
    profile: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Map a user profile onto form values.

    Profile keys read: firstName, lastName, gender, birthDate, zip, city,
    professionalStatus (or professionalCategory).
    """
    status = profile.get("professionalStatus") or profile.get("professionalCategory")
    candidates: dict[str, Any] = {
        "firstName": profile.get("firstName"),
        "lastName": profile.get("lastName"),
        "civility": civility_from_gender(profile.get("gender")),
        "birthDate": normalize_date(profile.get("birthDate")),
        "postalCode": profile.get("zip"),
        "city": profile.get("city"),
        "professionalStatus": match_status_option(
            definition.get_field("professionalStatus"), status
        ),
    }

    declared = set(definition.field_names)
    values = {
        name: value
        for name, value in candidates.items()
        if value and name in declared
    }
    if values:
        logger.debug("Prefilled %s from profile", ", ".join(sorted(values)))
    return values
