"""
ErrorEntry model representing one failed record in the error log.
"""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .raw_record import RawRecord

# Fixed column order of the error log table
ERROR_COLUMNS = ["timestamp", "record", "message", "detail"]


class ErrorEntry(BaseModel):
    """
    One append-only error log row per failed record.

    Attributes:
        timestamp: When the failure was recorded
        record: JSON-serialized original record
        message: Short error message (e.g. "Missing required fields")
        detail: Formatted traceback or other diagnostic detail
    """

    timestamp: datetime = Field(default_factory=datetime.now)
    record: str
    message: str
    detail: str = ""

    @classmethod
    def from_record(cls, raw: RawRecord, message: str, detail: str = "") -> "ErrorEntry":
        """Build an entry, serializing the raw record as JSON."""
        return cls(
            record=json.dumps(raw, default=str),
            message=message,
            detail=detail,
        )

    def to_row(self) -> list[Any]:
        """Return field values in error log column order."""
        return [getattr(self, column) for column in ERROR_COLUMNS]
