"""
CanonicalRecord model representing a validated, normalized contact row.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# Fixed column order of the output table
OUTPUT_COLUMNS = [
    "timestamp",
    "name",
    "email",
    "phone",
    "address",
    "category",
    "status",
    "process_date",
]


class CanonicalRecord(BaseModel):
    """
    A validated contact ready for the output table.

    Attributes:
        timestamp: Processing instant
        name: Title-cased, trimmed name (never empty)
        email: Lowercased email address
        phone: "(XXX) XXX-XXXX" for 10-digit numbers, original input otherwise
        address: Comma-joined non-empty street/city/state/zip parts
        category: Standardized category label
        status: Always "Processed"
        process_date: Calendar date of the processing instant
    """

    timestamp: datetime
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = ""
    address: str = ""
    category: str = ""
    status: Literal["Processed"] = "Processed"
    process_date: date

    def to_row(self) -> list[Any]:
        """Return field values in output column order."""
        return [getattr(self, column) for column in OUTPUT_COLUMNS]

    class Config:
        json_schema_extra = {
            "example": {
                "timestamp": "2025-11-17T10:00:00",
                "name": "John Smith",
                "email": "j@x.com",
                "phone": "(555) 123-4567",
                "address": "1 Main, Springfield, IL, 62704",
                "category": "Category A",
                "status": "Processed",
                "process_date": "2025-11-17"
            }
        }
