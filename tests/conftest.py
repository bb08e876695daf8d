"""
Pytest configuration and fixtures for FormPilot tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest
from datetime import date
from pathlib import Path

from formpilot.definitions import load_definition
from formpilot.models import (
    FieldOption,
    FieldType,
    FieldValidation,
    FormDefinition,
    FormField,
    FormSection,
    ShowWhen,
    Subsection,
)

FORMS_DIR = Path(__file__).parent.parent / "forms"

# Fixed reference date for date rules
TODAY = date(2024, 6, 15)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_field(
    name: str,
    type: FieldType = FieldType.TEXT,
    required: bool = False,
    subsection: str = None,
    show_when: ShowWhen = None,
    validation: FieldValidation = None,
    options: list = None,
    label: str = None,
    **kwargs,
) -> FormField:
    """Create a FormField; `subsection` is an id, its label is derived."""
    return FormField(
        name=name,
        type=type,
        label=label or name,
        required=required,
        validation=validation,
        options=[
            o if isinstance(o, FieldOption) else FieldOption(value=o, label=o)
            for o in (options or [])
        ],
        show_when=show_when,
        subsection=Subsection(id=subsection, label=subsection.replace("_", " ").title())
        if subsection else None,
        **kwargs,
    )


def make_definition(
    fields: list,
    category: str = "auto",
    title: str = "Formulaire",
) -> FormDefinition:
    """Wrap fields in a single-section definition."""
    return FormDefinition(
        category=category,
        sections=[FormSection(title=title, fields=list(fields))],
    )


def make_usage_definition() -> FormDefinition:
    """
    Small auto form with two conditional fields:

    - usage step: usageType, workPostalCode (when usageType is a work usage)
    - contract step: paymentFrequency
    - budget step: maxMonthlyPremium (when paymentFrequency == "monthly")
    """
    return make_definition([
        make_field(
            "usageType", FieldType.SELECT, required=True, subsection="usage",
            options=["private_only", "private_work"],
        ),
        make_field(
            "workPostalCode", required=True, subsection="usage",
            show_when=ShowWhen(field="usageType", in_values=["private_work"]),
            validation=FieldValidation(pattern=r"^[0-9]{5}$"),
        ),
        make_field(
            "paymentFrequency", FieldType.RADIO, required=True, subsection="contract",
            options=["monthly", "annual"],
        ),
        make_field(
            "maxMonthlyPremium", FieldType.NUMBER, required=True, subsection="budget",
            show_when=ShowWhen(field="paymentFrequency", equals="monthly"),
            validation=FieldValidation(min=0, max=500),
        ),
    ])


# =============================================================================
# Common Fixtures
# =============================================================================

@pytest.fixture
def usage_definition():
    return make_usage_definition()


@pytest.fixture
def auto_definition():
    """The shipped auto form."""
    return load_definition(FORMS_DIR / "auto.yaml")


@pytest.fixture
def home_definition():
    return load_definition(FORMS_DIR / "home.yaml")


@pytest.fixture
def complete_auto_values():
    """Answers that pass validation of the shipped auto form."""
    return {
        "civility": "M.",
        "firstName": "Jean",
        "lastName": "Dupont",
        "birthDate": "15/06/1990",
        "email": "jean.dupont@example.fr",
        "maritalStatus": "married",
        "numberOfChildren": "2",
        "childrenBirthYears": "2015, 2018",
        "professionalStatus": "employee",
        "postalCode": "75001",
        "city": "Paris",
        "licenseType": "b",
        "drivingLicenseDate": "01/09/2010",
        "bonusMalus": "50_more_3_years",
        "cardHolder": "me",
        "firstRegistrationDate": "03/2019",
        "power": 6,
        "purchasePrice": 18000,
        "vehicleValue": 12000,
        "securityEquipment": True,
        "usageType": "private_work",
        "workPostalCode": "92100",
        "annualMileage": 12000,
        "nightParkingType": "individual_garage",
        "desiredCoverageLevel": "comprehensive",
        "contractStartDate": "01/01/2025",
        "optionalGuarantees_legalDefense": True,
        "paymentFrequency": "monthly",
        "maxMonthlyPremium": 80,
        "acceptTerms": True,
    }
