"""
FormPilot Data Normalizer

Turns raw wizard values into the payload shape the comparison backend
accepts. The backend schema is strict while wizard input is loose, so the
pipeline runs these steps in order:

1. Date fields rewritten to ISO (YYYY-MM-DD); unparseable dates are dropped
2. Legacy/UI enum tokens remapped to backend tokens
3. Prefixed boolean toggles collapsed into one nested object
4. Missing backend-required fields derived from correlated answers
5. Numeric fields coerced from strings (including bucket tokens like "3_plus")
6. Required string fields omitted when empty

Steps 3-6 are category specific; see NORMALIZATION_PROFILES.

The normalizer is total: malformed optional data is omitted or passed
through, never raised. Input mappings are never mutated.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Union

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)


# =============================================================================
# Field Tables
# =============================================================================

DATE_FIELDS: tuple[str, ...] = (
    "birthDate",
    "drivingLicenseDate",
    "firstRegistrationDate",
    "purchaseDate",
    "contractStartDate",
    "spouseLicenseDate",
    "spouseBirthDate",
)

ENUM_MAPPINGS: dict[str, dict[str, str]] = {
    "cardHolder": {
        "me": "you",
        "spouse": "spouse",
        "parent": "parent",
        "other": "other",
        "both": "you",
    },
    "bonusMalus": {
        "50_more_3_years": "50_3_years",
    },
    "desiredCoverageLevel": {
        "third_party_glass_theft": "third_party_glass",
        "third_party_basic": "third_party_basic",
        "comprehensive": "comprehensive",
        "tous_risques": "comprehensive",
        "tiers": "third_party_basic",
        "tiers_plus": "third_party_glass",
    },
    "licenseType": {
        "b": "B",
        "b_accompanied": "b_accompanied",
    },
}

AUTO_NUMERIC_FIELDS: tuple[str, ...] = (
    "numberOfChildren",
    "vehicleValue",
    "distanceHomeToWork",
    "claimsLast3To5Years",
    "claimsLast3Years",
    "yearsInsured",
    "additionalDriverAge",
    "maxAnnualPremium",
    "maxMonthlyPremium",
    "power",
    "doorCount",
    "modelYear",
    "vehicleOwnershipYears",
)

# Bucket tokens offered by select fields, per field
NUMERIC_TOKENS: dict[str, dict[str, int]] = {
    "numberOfChildren": {"3_plus": 3},
    "vehicleOwnershipYears": {"5_plus": 5, "less_1": 0},
}

AUTO_NON_EMPTY_STRING_FIELDS: tuple[str, ...] = (
    "firstName",
    "lastName",
    "postalCode",
    "city",
    "nightParkingCity",
)

OPTIONAL_GUARANTEES_PREFIX = "optionalGuarantees_"
OPTIONAL_GUARANTEE_KEYS: tuple[str, ...] = (
    "assistance0km",
    "replacementVehicle",
    "extendedDriverProtection",
    "legalDefense",
    "theftFire",
)


# =============================================================================
# JavaScript-style truthiness
# =============================================================================

def _falsy(value: Any) -> bool:
    """
    Falsy in the sense the wizard front-end used: missing, None, False,
    '', 0 and NaN. Empty lists and dicts count as present.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _truthy(value: Any) -> bool:
    return not _falsy(value)


# =============================================================================
# Dates
# =============================================================================

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DAY_MONTH_YEAR = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_MONTH_YEAR = re.compile(r"^(\d{2})/(\d{4})$")

# Missing month or day parts resolve to January and the 1st; the two
# defaults differ only in year so a missing year is detectable.
_PARSE_DEFAULT = datetime(1900, 1, 1)
_PARSE_PROBE = datetime(1904, 1, 1)


def normalize_date(value: Any) -> Optional[str]:
    """
    Convert a date answer to ISO YYYY-MM-DD.

    Accepted forms, in order:
    - YYYY-MM-DD (returned unchanged)
    - DD/MM/YYYY
    - MM/YYYY (first day of the month)
    - free text python-dateutil can parse, as long as it names a year;
      a missing month or day becomes January or the 1st
    - date/datetime objects

    Returns:
        ISO date string, or None when the value is not a date
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not value or not isinstance(value, str):
        return None

    if _ISO_DATE.match(value):
        return value

    match = _DAY_MONTH_YEAR.match(value)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month}-{day}"

    match = _MONTH_YEAR.match(value)
    if match:
        month, year = match.groups()
        return f"{year}-{month}-01"

    return _parse_free_form(value)


def _parse_free_form(value: str) -> Optional[str]:
    """Parse free text with python-dateutil; None when it carries no year."""
    try:
        parsed = date_parser.parse(value, default=_PARSE_DEFAULT)
        probe = date_parser.parse(value, default=_PARSE_PROBE)
    except (ValueError, OverflowError):
        return None
    if parsed.year != probe.year:
        return None
    return parsed.date().isoformat()


def parse_date(value: Any) -> Optional[date]:
    """Normalize then parse into a date; None for impossible calendar dates."""
    iso = normalize_date(value)
    if iso is None:
        return None
    try:
        return date.fromisoformat(iso)
    except ValueError:
        return None


# =============================================================================
# Enums
# =============================================================================

def map_enum_value(field_name: str, value: Any) -> Any:
    """
    Translate a UI option token into the backend token for a field.

    Non-string values and unmapped tokens are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    mapping = ENUM_MAPPINGS.get(field_name)
    if mapping and mapping.get(value):
        return mapping[value]
    return value


# =============================================================================
# Numbers
# =============================================================================

_INT_TEXT = re.compile(r"^\s*[-+]?\d+\s*$")
_LEADING_INT = re.compile(r"^(\d+)")


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Parse an int or finite float from text; None when not numeric."""
    if _INT_TEXT.match(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def coerce_number(field_name: str, value: Any) -> Any:
    """
    Coerce a string answer to a number.

    - Per-field bucket tokens first ("3_plus" -> 3, "less_1" -> 0)
    - Underscore tokens yield their leading integer ("3_5" -> 3)
    - Otherwise plain int/float parsing

    Non-strings and unparseable strings are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    tokens = NUMERIC_TOKENS.get(field_name, {})
    if value in tokens:
        return tokens[value]

    if "_" in value:
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else value

    number = parse_number(value)
    return value if number is None else number


# =============================================================================
# Derived Defaults (auto)
# =============================================================================

_PROFESSION_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("salarié", "employee"), "employee"),
    (("étudiant", "student"), "student"),
    (("retraité", "retired"), "retired"),
    (("chômeur", "unemployed"), "unemployed"),
)


def _has_secondary_driver(data: Mapping[str, Any]) -> bool:
    secondary = data.get("hasSecondaryDriver")
    return _truthy(secondary) and secondary != "no"


def _civility(data: Mapping[str, Any]) -> str:
    gender = data.get("gender")
    if _truthy(gender):
        return "M." if str(gender).lower() in ("male", "m", "homme") else "Mme"
    return "M."


def _professional_status(data: Mapping[str, Any]) -> str:
    profession = data.get("profession")
    if _falsy(profession):
        return "employee"
    text = str(profession).lower()
    for keywords, status in _PROFESSION_KEYWORDS:
        if any(k in text for k in keywords):
            return status
    return "other"


def _owner(data: Mapping[str, Any]) -> str:
    if _truthy(data.get("cardHolder")):
        return map_enum_value("cardHolder", data["cardHolder"])
    return "you"


def _is_sole_owner(data: Mapping[str, Any]) -> str:
    return "no" if _has_secondary_driver(data) else "yes"


def _planned_trips(data: Mapping[str, Any]) -> Any:
    usage = data.get("usageType")
    return usage if _truthy(usage) else "private_only"


def _parking_location(data: Mapping[str, Any]) -> str:
    parking = data.get("nightParkingType")
    if _falsy(parking):
        return "street"
    parking = str(parking)
    if "garage" in parking:
        return "garage"
    if "closed" in parking:
        return "covered_parking"
    return "street"


def _night_parking_mode(data: Mapping[str, Any]) -> str:
    parking = data.get("nightParkingType")
    if _falsy(parking):
        return "public_road"
    parking = str(parking)
    if "individual" in parking:
        return "individual"
    if "collective" in parking or "closed" in parking:
        return "collective_closed"
    return "public_road"


def _has_been_insured(data: Mapping[str, Any]) -> Any:
    current = data.get("isCurrentlyInsured")
    return current if _truthy(current) else "no"


def _is_secondary_driver_other_vehicle(data: Mapping[str, Any]) -> str:
    return "yes" if data.get("isCurrentlyInsured") == "secondary_driver" else "no"


def _claims_last_3_to_5_years(data: Mapping[str, Any]) -> Union[int, float]:
    claims = data.get("claimsLast3Years")
    if _falsy(claims):
        return 0
    if isinstance(claims, str):
        match = re.match(r"^\s*([-+]?\d+)", claims)
        return int(match.group(1)) if match else 0
    return claims


def _coverage_level(data: Mapping[str, Any]) -> Any:
    desired = data.get("desiredCoverageLevel")
    if _truthy(desired):
        return map_enum_value("desiredCoverageLevel", desired)
    return "third_party_basic"


def _constant(value: Any) -> Callable[[Mapping[str, Any]], Any]:
    return lambda data: value


@dataclass(frozen=True)
class DerivedDefault:
    """
    Fill `target` from `derive(data)` when the current value is missing.

    `only_if_absent` restricts the check to None/missing instead of
    falsy, so explicit 0/False/'' answers are kept.
    """
    target: str
    derive: Callable[[Mapping[str, Any]], Any]
    only_if_absent: bool = False

    def applies(self, data: Mapping[str, Any]) -> bool:
        current = data.get(self.target)
        if self.only_if_absent:
            return current is None
        return _falsy(current)


AUTO_DERIVED_DEFAULTS: tuple[DerivedDefault, ...] = (
    # Personal info
    DerivedDefault("civility", _civility),
    DerivedDefault("professionalStatus", _professional_status),
    # Vehicle
    DerivedDefault("vehicleValue", _constant(15000)),
    DerivedDefault("owner", _owner),
    DerivedDefault("isSoleOwner", _is_sole_owner),
    # Usage
    DerivedDefault("plannedTrips", _planned_trips),
    DerivedDefault("distanceHomeToWork", _constant(0), only_if_absent=True),
    DerivedDefault("vehicleUsageFrequency", _constant("daily")),
    DerivedDefault("parkingLocation", _parking_location),
    DerivedDefault("nightParkingMode", _night_parking_mode),
    DerivedDefault("workInFrance", _constant("yes")),
    # Insurance history
    DerivedDefault("hasBeenInsured", _has_been_insured),
    DerivedDefault(
        "isSecondaryDriverOtherVehicle",
        _is_secondary_driver_other_vehicle,
        only_if_absent=True,
    ),
    DerivedDefault("claimsLast3To5Years", _claims_last_3_to_5_years, only_if_absent=True),
    DerivedDefault("pointsLost", _constant("0")),
    # Coverage
    DerivedDefault("coverageLevel", _coverage_level),
    DerivedDefault("hasAdditionalDrivers", _has_secondary_driver, only_if_absent=True),
)


# =============================================================================
# Grouped Booleans
# =============================================================================

@dataclass(frozen=True)
class BooleanGroup:
    """Prefixed toggles collapsed into one nested object with fixed keys."""
    target: str
    prefix: str
    keys: tuple[str, ...]

    def collapse(self, data: dict[str, Any]) -> None:
        prefixed = [k for k in data if k.startswith(self.prefix)]
        if not prefixed:
            return
        group = {key: False for key in self.keys}
        for name in prefixed:
            short = name[len(self.prefix):]
            flag = data.pop(name)
            if short in group:
                group[short] = _truthy(flag)
            else:
                logger.debug("Dropping unknown %s toggle %r", self.target, name)
        data[self.target] = group


AUTO_BOOLEAN_GROUPS: tuple[BooleanGroup, ...] = (
    BooleanGroup(
        target="optionalGuarantees",
        prefix=OPTIONAL_GUARANTEES_PREFIX,
        keys=OPTIONAL_GUARANTEE_KEYS,
    ),
)


# =============================================================================
# Profiles
# =============================================================================

@dataclass(frozen=True)
class NormalizationProfile:
    """Category-specific normalization tables."""
    date_fields: tuple[str, ...] = DATE_FIELDS
    boolean_groups: tuple[BooleanGroup, ...] = ()
    derived_defaults: tuple[DerivedDefault, ...] = ()
    numeric_fields: tuple[str, ...] = ()
    non_empty_string_fields: tuple[str, ...] = ()


DEFAULT_PROFILE = NormalizationProfile()

NORMALIZATION_PROFILES: dict[str, NormalizationProfile] = {
    "auto": NormalizationProfile(
        boolean_groups=AUTO_BOOLEAN_GROUPS,
        derived_defaults=AUTO_DERIVED_DEFAULTS,
        numeric_fields=AUTO_NUMERIC_FIELDS,
        non_empty_string_fields=AUTO_NON_EMPTY_STRING_FIELDS,
    ),
}


def get_profile(category: str) -> NormalizationProfile:
    return NORMALIZATION_PROFILES.get(str(category), DEFAULT_PROFILE)


# =============================================================================
# Normalizer
# =============================================================================

@dataclass
class NormalizationResult:
    """Normalized payload plus the optional fields that were dropped."""
    payload: dict[str, Any]
    dropped_fields: list[str] = field(default_factory=list)


@dataclass
class DataNormalizer:
    """
    Prepares wizard values for the comparison backend.

    Usage:
        normalizer = DataNormalizer()
        payload = normalizer.normalize("auto", values)
    """
    profiles: dict[str, NormalizationProfile] = field(
        default_factory=lambda: dict(NORMALIZATION_PROFILES)
    )

    def profile_for(self, category: str) -> NormalizationProfile:
        return self.profiles.get(str(category), DEFAULT_PROFILE)

    def normalize(self, category: str, raw_values: Mapping[str, Any]) -> dict[str, Any]:
        """Return the backend payload for `raw_values`."""
        return self.normalize_report(category, raw_values).payload

    def normalize_report(
        self,
        category: str,
        raw_values: Mapping[str, Any],
    ) -> NormalizationResult:
        """Normalize and report which date fields were dropped."""
        profile = self.profile_for(category)
        data: dict[str, Any] = dict(raw_values or {})
        dropped: list[str] = []

        self._normalize_dates(data, profile, dropped)
        self._map_enums(data)
        for group in profile.boolean_groups:
            group.collapse(data)
        self._apply_defaults(data, profile)
        self._coerce_numbers(data, profile)
        self._drop_empty_strings(data, profile)

        if dropped:
            logger.debug(
                "Dropped unparseable dates for category %s: %s",
                category,
                ", ".join(dropped),
            )
        return NormalizationResult(payload=data, dropped_fields=dropped)

    def _normalize_dates(
        self,
        data: dict[str, Any],
        profile: NormalizationProfile,
        dropped: list[str],
    ) -> None:
        for name in profile.date_fields:
            if _falsy(data.get(name)):
                continue
            normalized = normalize_date(data[name])
            if normalized is None:
                del data[name]
                dropped.append(name)
            else:
                data[name] = normalized

    def _map_enums(self, data: dict[str, Any]) -> None:
        for name in list(data):
            data[name] = map_enum_value(name, data[name])

    def _apply_defaults(self, data: dict[str, Any], profile: NormalizationProfile) -> None:
        for default in profile.derived_defaults:
            if default.applies(data):
                data[default.target] = default.derive(data)

    def _coerce_numbers(self, data: dict[str, Any], profile: NormalizationProfile) -> None:
        for name in profile.numeric_fields:
            if data.get(name) is not None:
                data[name] = coerce_number(name, data[name])

    def _drop_empty_strings(self, data: dict[str, Any], profile: NormalizationProfile) -> None:
        for name in profile.non_empty_string_fields:
            if name in data and (data[name] is None or data[name] == ""):
                del data[name]


# =============================================================================
# Convenience Functions
# =============================================================================

_default_normalizer = DataNormalizer()


def normalize(category: str, raw_values: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize values with the built-in profiles."""
    return _default_normalizer.normalize(category, raw_values)


def normalize_report(category: str, raw_values: Mapping[str, Any]) -> NormalizationResult:
    return _default_normalizer.normalize_report(category, raw_values)
