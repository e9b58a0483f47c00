"""
Pure field formatters used by the normalizer.

Each formatter takes raw string input and returns the canonical form.
None of them touch anything outside their arguments.
"""

import re
from typing import Any, Mapping

_NON_DIGITS = re.compile(r"\D", re.ASCII)

ADDRESS_FIELDS = ("street_address", "city", "state", "zip_code")

CATEGORY_MAP = {
    "cat a": "Category A",
    "cat b": "Category B",
    "cat c": "Category C",
}


def format_name(name: str) -> str:
    """
    Trim, then title-case each single-space separated part.

    Internal runs of spaces are kept as they are.

    Examples:
        >>> format_name("  john SMITH ")
        'John Smith'
    """
    parts = name.strip().split(" ")
    return " ".join(part[:1].upper() + part[1:].lower() for part in parts)


def format_phone(phone: str | None) -> str:
    """
    Format a 10-digit phone number as "(AAA) BBB-CCCC".

    Anything that does not reduce to exactly 10 digits is returned
    unchanged; an empty or missing phone returns "".

    Examples:
        >>> format_phone("555.123.4567")
        '(555) 123-4567'
        >>> format_phone("+44 20 7946 0958")
        '+44 20 7946 0958'
    """
    if not phone:
        return ""
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return phone


def format_address(record: Mapping[str, Any]) -> str:
    """Join the non-empty street, city, state and zip parts with ", "."""
    parts = [record.get(field) for field in ADDRESS_FIELDS]
    return ", ".join(str(part) for part in parts if part)


def standardize_category(category: str | None) -> str:
    """
    Map a category through the synonym table, case-insensitively.

    Unknown categories pass through unchanged (original case).
    """
    if category is None:
        return ""
    return CATEGORY_MAP.get(category.lower(), category)
