"""
FormPilot Input Masks

Mask patterns use `9` for a digit slot and `A` for a letter slot; any
other character is a literal inserted by the mask (e.g. "99/99/9999").
"""
from __future__ import annotations

from ..models import FieldMask

DIGIT_SLOT = "9"
LETTER_SLOT = "A"
_SLOTS = (DIGIT_SLOT, LETTER_SLOT)


def _fits(slot: str, char: str) -> bool:
    if slot == DIGIT_SLOT:
        return "0" <= char <= "9"
    return char.isascii() and char.isalpha()


def apply_mask(value: str, mask: FieldMask) -> str:
    """
    Format raw input with a mask.

    Characters that do not fit the current slot are skipped; letters are
    upper-cased; literals are emitted as long as input remains.
    """
    if not mask.pattern or not value:
        return value

    result: list[str] = []
    chars = iter(value)
    pending = next(chars, None)

    for slot in mask.pattern:
        if pending is None:
            break
        if slot not in _SLOTS:
            result.append(slot)
            continue
        while pending is not None and not _fits(slot, pending):
            pending = next(chars, None)
        if pending is None:
            break
        result.append(pending.upper() if slot == LETTER_SLOT else pending)
        pending = next(chars, None)

    return "".join(result)


def remove_mask(value: str, mask: FieldMask) -> str:
    """Strip mask literals, keeping only characters that filled a slot."""
    if not mask.pattern:
        return value

    slots = [s for s in mask.pattern if s in _SLOTS]
    result: list[str] = []
    for char in value:
        if len(result) == len(slots):
            break
        if _fits(slots[len(result)], char):
            result.append(char)
    return "".join(result)


def mask_placeholder(mask: FieldMask) -> str:
    """Placeholder text; guided masks show '_' in digit slots."""
    if not mask.guide:
        return mask.placeholder or ""
    return mask.pattern.replace(DIGIT_SLOT, "_")


def validate_mask(value: str, mask: FieldMask) -> bool:
    """True when every slot of the mask is filled."""
    if not mask.pattern:
        return True
    expected = sum(1 for s in mask.pattern if s in _SLOTS)
    return len(remove_mask(value, mask)) == expected
