"""
Result of normalizing one raw record: either a canonical record or a failure.
"""

from typing import Literal

from pydantic import BaseModel, model_validator

from .canonical_record import CanonicalRecord

FailureKind = Literal["missing_required_fields", "invalid_email_format", "formatting_error"]


class ValidationFailure(BaseModel):
    """
    Tagged failure for a record that could not be normalized.

    Attributes:
        kind: Failure category
        message: Short message written to the error log
        detail: Formatted traceback of the underlying exception
    """

    kind: FailureKind
    message: str
    detail: str = ""


class NormalizationResult(BaseModel):
    """Exactly one of `record` or `failure` is set."""

    record: CanonicalRecord | None = None
    failure: ValidationFailure | None = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "NormalizationResult":
        """Validate that the result holds either a record or a failure."""
        if (self.record is None) == (self.failure is None):
            raise ValueError("NormalizationResult needs exactly one of record or failure")
        return self

    @property
    def ok(self) -> bool:
        return self.record is not None
