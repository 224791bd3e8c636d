# bulkads/utils/id_fields.py

import re


SCIENTIFIC_NOTATION_RE = re.compile(r"^([0-9]+)(?:\.([0-9]+))?[eE]([+-]?[0-9]+)$")
EXCEL_TEXT_FORMULA_RE = re.compile(r'^=\s*"(.*)"$')
DIGITS_RE = re.compile(r"^[0-9]+$")

# Graph object IDs are well under this many digits
MAX_ID_DIGITS = 20


def _unwrap(raw) -> str:
    """Strip whitespace, quotes and Excel's ="..." text-formula marker."""
    value = "" if raw is None else str(raw).strip()

    match = EXCEL_TEXT_FORMULA_RE.match(value)
    if match:
        value = match.group(1).strip()
    elif value.startswith("="):
        value = value[1:].strip()

    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1].strip()

    return value


def is_scientific_notation(raw) -> bool:
    return bool(SCIENTIFIC_NOTATION_RE.match(_unwrap(raw)))


def expand_scientific_notation(value: str):
    """
    Rebuild the integer digits behind a value such as "1.04882E+14" using
    string arithmetic only. Returns None when the shifted value is not a
    whole number or would be longer than MAX_ID_DIGITS.
    """
    match = SCIENTIFIC_NOTATION_RE.match(value)
    if not match:
        return None

    exponent_digits = match.group(3).lstrip("+-").lstrip("0")
    if len(exponent_digits) > len(str(MAX_ID_DIGITS)):
        return None

    int_part, frac_part, exponent = match.group(1), match.group(2) or "", int(match.group(3))
    digits = int_part + frac_part
    point = len(int_part) + exponent

    if point > MAX_ID_DIGITS:
        return None

    if point >= len(digits):
        whole = digits + "0" * (point - len(digits))
    elif point <= 0:
        if digits.strip("0"):
            return None
        whole = "0"
    else:
        whole, remainder = digits[:point], digits[point:]
        if remainder.strip("0"):
            return None

    return whole.lstrip("0") or "0"


def normalize_id_field(raw) -> str:
    """
    Normalize a Facebook ID cell exported from a spreadsheet.

    Plain digits (optionally quoted or wrapped as ="...") are returned
    unwrapped, scientific notation is expanded to its exact digit string,
    and anything else is returned unwrapped so validation can reject it.
    """
    value = _unwrap(raw)
    if not value:
        return ""

    if DIGITS_RE.match(value):
        return value

    expanded = expand_scientific_notation(value)
    if expanded is not None:
        return expanded

    return value
