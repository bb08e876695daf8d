"""
FormPilot Field Shortcuts

Quick-pick values shown next to date and number inputs. A definition may
declare its own shortcuts per field; otherwise built-in presets apply.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..models import FieldShortcut, FieldType, FormField

_MONTHS_FR = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)

NUMBER_SHORTCUTS: dict[str, tuple[FieldShortcut, ...]] = {
    "maxMonthlyPremium": tuple(
        FieldShortcut(str(v), f"{v}€", f"Budget mensuel de {v}€")
        for v in (50, 100, 150, 200)
    ),
    "maxAnnualPremium": tuple(
        FieldShortcut(str(v), f"{v}€", f"Budget annuel de {v}€")
        for v in (600, 1200, 1800, 2400)
    ),
    "annualMileage": (
        FieldShortcut("5000", "5 000 km", "Kilométrage faible"),
        FieldShortcut("10000", "10 000 km", "Kilométrage moyen"),
        FieldShortcut("15000", "15 000 km", "Kilométrage élevé"),
        FieldShortcut("20000", "20 000 km", "Kilométrage très élevé"),
    ),
    "vehicleValue": (
        FieldShortcut("5000", "5 000€", "Véhicule d'occasion récent"),
        FieldShortcut("10000", "10 000€", "Véhicule d'occasion moyen"),
        FieldShortcut("15000", "15 000€", "Véhicule neuf entrée de gamme"),
        FieldShortcut("25000", "25 000€", "Véhicule neuf milieu de gamme"),
    ),
}


def _first_of_next_month(today: date) -> date:
    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


def date_shortcuts(today: Optional[date] = None) -> list[FieldShortcut]:
    today = today or date.today()
    tomorrow = today + timedelta(days=1)
    next_month = _first_of_next_month(today)
    return [
        FieldShortcut("today", "Aujourd'hui", f"Aujourd'hui ({today:%d/%m/%Y})"),
        FieldShortcut("tomorrow", "Demain", f"Demain ({tomorrow:%d/%m/%Y})"),
        FieldShortcut(
            "next_month",
            "Mois prochain",
            f"1er {_MONTHS_FR[next_month.month - 1]} {next_month.year}",
        ),
        FieldShortcut("asap", "Dès que possible", "Début immédiat du contrat"),
    ]


def field_shortcuts(field: FormField, today: Optional[date] = None) -> list[FieldShortcut]:
    """Shortcuts declared on the field, else the built-in presets for its type."""
    if field.shortcuts:
        return list(field.shortcuts)
    if field.type == FieldType.DATE:
        return date_shortcuts(today)
    if field.type == FieldType.NUMBER:
        return list(NUMBER_SHORTCUTS.get(field.name, ()))
    return []


def apply_shortcut(value: str, field_type: FieldType, today: Optional[date] = None) -> str:
    """Resolve a shortcut token to the value stored in the form."""
    if FieldType(field_type) != FieldType.DATE:
        return value
    today = today or date.today()
    resolved = {
        "today": today,
        "asap": today,
        "tomorrow": today + timedelta(days=1),
        "next_month": _first_of_next_month(today),
    }.get(value)
    return resolved.isoformat() if resolved else value
