"""
Record normalizer: one raw record in, one canonical record or failure out.
"""

import traceback
from datetime import datetime
from typing import Sequence

from contact_pipeline.core.formatters import (
    format_address,
    format_name,
    format_phone,
    standardize_category,
)
from contact_pipeline.core.models import (
    CanonicalRecord,
    NormalizationResult,
    RawRecord,
    ValidationFailure,
)
from contact_pipeline.core.validators import DEFAULT_VALIDATORS, BaseValidator, ValidationError


def _format_detail(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def validate(raw: RawRecord, validators: Sequence[BaseValidator] = DEFAULT_VALIDATORS) -> None:
    """
    Run validators in order; the first failure is raised.

    Raises:
        ValidationError: If the record fails an admission rule
    """
    for validator in validators:
        validator.validate(raw)


def normalize(
    raw: RawRecord,
    now: datetime | None = None,
    validators: Sequence[BaseValidator] = DEFAULT_VALIDATORS,
) -> NormalizationResult:
    """
    Validate and reformat a raw contact record.

    Never raises. Validation failures come back tagged with their rule
    type; any other exception while formatting is reported as a
    formatting_error carrying the exception text.

    Args:
        raw: Raw record keyed by normalized header names
        now: Processing instant (defaults to the current time)
        validators: Admission rules, applied in order

    Returns:
        NormalizationResult holding either the record or the failure
    """
    now = now or datetime.now()

    try:
        validate(raw, validators)
        record = CanonicalRecord(
            timestamp=now,
            name=format_name(raw["name"]),
            email=raw["email"].lower(),
            phone=format_phone(raw.get("phone")),
            address=format_address(raw),
            category=standardize_category(raw.get("category")),
            process_date=now.date(),
        )
    except ValidationError as e:
        return NormalizationResult(
            failure=ValidationFailure(kind=e.rule_name, message=e.message, detail=_format_detail(e))
        )
    except Exception as e:
        return NormalizationResult(
            failure=ValidationFailure(kind="formatting_error", message=str(e), detail=_format_detail(e))
        )

    return NormalizationResult(record=record)
