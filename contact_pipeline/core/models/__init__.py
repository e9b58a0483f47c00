"""
Core data models for the contact pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .canonical_record import OUTPUT_COLUMNS, CanonicalRecord
from .checkpoint import ResumeCheckpoint
from .error_entry import ERROR_COLUMNS, ErrorEntry
from .normalization_result import NormalizationResult, ValidationFailure
from .raw_record import RawRecord, build_raw_record, is_empty_row, normalize_header
from .run_counters import RunCounters, RunOutcome

__all__ = [
    "OUTPUT_COLUMNS",
    "ERROR_COLUMNS",
    "CanonicalRecord",
    "ErrorEntry",
    "ResumeCheckpoint",
    "RunCounters",
    "RunOutcome",
    "NormalizationResult",
    "ValidationFailure",
    "RawRecord",
    "build_raw_record",
    "is_empty_row",
    "normalize_header",
]
