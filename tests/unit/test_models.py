"""
Unit tests for Pydantic data models.
"""

import json
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from contact_pipeline.core.models import (
    ERROR_COLUMNS,
    OUTPUT_COLUMNS,
    CanonicalRecord,
    ErrorEntry,
    NormalizationResult,
    ResumeCheckpoint,
    RunCounters,
    ValidationFailure,
    build_raw_record,
    is_empty_row,
    normalize_header,
)


class TestCanonicalRecord:
    """Tests for CanonicalRecord model"""

    def test_to_row_follows_output_column_order(self):
        now = datetime(2025, 11, 17, 8, 0, 0)
        record = CanonicalRecord(
            timestamp=now,
            name="Ann Lee",
            email="ann@example.com",
            phone="(555) 123-4567",
            address="Springfield",
            category="Category B",
            process_date=now.date(),
        )

        assert record.to_row() == [
            now, "Ann Lee", "ann@example.com", "(555) 123-4567",
            "Springfield", "Category B", "Processed", date(2025, 11, 17),
        ]
        assert len(OUTPUT_COLUMNS) == len(record.to_row())

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            CanonicalRecord(timestamp=datetime.now(), name="", email="a@b.co", process_date=date.today())
        assert "name" in str(exc_info.value)

    def test_status_is_constant(self):
        with pytest.raises(ValidationError):
            CanonicalRecord(
                timestamp=datetime.now(), name="A", email="a@b.co",
                status="Pending", process_date=date.today(),
            )


class TestErrorEntry:
    """Tests for ErrorEntry model"""

    def test_from_record_serializes_raw_record(self):
        entry = ErrorEntry.from_record({"name": "", "email": "bad"}, "Missing required fields", "trace")

        assert json.loads(entry.record) == {"name": "", "email": "bad"}
        assert entry.to_row()[1:] == [entry.record, "Missing required fields", "trace"]
        assert len(entry.to_row()) == len(ERROR_COLUMNS)


class TestResumeCheckpoint:
    """Tests for ResumeCheckpoint model"""

    def test_valid_checkpoint(self):
        checkpoint = ResumeCheckpoint(next_offset=100, total_length=250, trigger_id="abc")
        assert checkpoint.next_offset == 100
        assert isinstance(checkpoint.created_at, datetime)

    def test_offset_past_total_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ResumeCheckpoint(next_offset=300, total_length=250, trigger_id="abc")
        assert "exceeds total_length" in str(exc_info.value)

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            ResumeCheckpoint(next_offset=-1, total_length=250, trigger_id="abc")

    def test_json_round_trip(self):
        checkpoint = ResumeCheckpoint(next_offset=50, total_length=75, trigger_id="t-1")
        assert ResumeCheckpoint.model_validate_json(checkpoint.model_dump_json()) == checkpoint


class TestNormalizationResult:
    """Tests for NormalizationResult model"""

    def test_needs_exactly_one_side(self):
        with pytest.raises(ValidationError):
            NormalizationResult()

    def test_failure_side(self):
        result = NormalizationResult(
            failure=ValidationFailure(kind="invalid_email_format", message="Invalid email format")
        )
        assert not result.ok


class TestRunCounters:
    def test_starts_at_zero(self):
        counters = RunCounters()
        assert counters.processed_count == 0
        assert counters.error_count == 0


class TestRawRecordHelpers:
    """Tests for header normalization and row handling"""

    @pytest.mark.parametrize("header,expected", [
        ("Name", "name"),
        ("Street Address", "street_address"),
        ("ZIP   Code", "zip_code"),
        ("Zip\tCode", "zip_code"),
        (" Email", "_email"),
    ])
    def test_normalize_header(self, header, expected):
        assert normalize_header(header) == expected

    def test_is_empty_row(self):
        assert is_empty_row(["", "", None])
        assert is_empty_row([])
        assert not is_empty_row(["", "x"])
        assert not is_empty_row([0])

    def test_build_raw_record_pads_and_coerces(self):
        record = build_raw_record(["name", "email", "zip_code"], ["Ann", None])
        assert record == {"name": "Ann", "email": "", "zip_code": ""}

        record = build_raw_record(["zip_code"], [62704, "extra"])
        assert record == {"zip_code": "62704"}
