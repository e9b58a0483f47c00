"""
RawRecord helpers: turning a header row and a data row into a field mapping.

A RawRecord is ephemeral; it only lives for one processing pass.
"""

import re
from typing import Any, Sequence

RawRecord = dict[str, str]

_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: Any) -> str:
    """
    Normalize a header cell into a field key.

    Lowercases the cell and replaces each whitespace run with a single
    underscore. Outer whitespace is not trimmed.

    Examples:
        >>> normalize_header("Street Address")
        'street_address'
        >>> normalize_header("ZIP  Code")
        'zip_code'
    """
    return _WHITESPACE.sub("_", str(header).lower())


def is_empty_row(row: Sequence[Any]) -> bool:
    """Return True when every cell in the row is empty."""
    return all(cell is None or cell == "" for cell in row)


def build_raw_record(headers: Sequence[str], row: Sequence[Any]) -> RawRecord:
    """
    Pair normalized headers with row cells.

    Cells are coerced to strings (None becomes ""). Short rows are padded
    with "", cells beyond the header are ignored.
    """
    record: RawRecord = {}
    for index, header in enumerate(headers):
        cell = row[index] if index < len(row) else None
        record[header] = "" if cell is None else str(cell)
    return record
