"""
Unit tests for CSV-backed tables.
"""

import csv
from datetime import date, datetime

import pytest

from contact_pipeline.core.models import OUTPUT_COLUMNS
from contact_pipeline.stores import CsvTableStore, CsvWorkbook, StoreError


def read_csv(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestCsvTableStore:
    """Tests for CsvTableStore"""

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(StoreError) as exc_info:
            CsvTableStore(tmp_path / "Raw Data.csv").read_rows()
        assert "not found" in str(exc_info.value)

    def test_read_rows_includes_header(self, tmp_path):
        path = tmp_path / "Raw Data.csv"
        path.write_text("Name,Email\nAnn,ann@example.com\n", encoding="utf-8")

        assert CsvTableStore(path).read_rows() == [["Name", "Email"], ["Ann", "ann@example.com"]]

    def test_first_append_writes_header(self, tmp_path):
        store = CsvTableStore(tmp_path / "out" / "Processed Data.csv", OUTPUT_COLUMNS)
        now = datetime(2025, 11, 17, 8, 0, 0)

        count = store.append_rows([[now, "Ann", "ann@x.io", "", "", "", "Processed", now.date()]])
        store.append_rows([[now, "Bo", "bo@x.io", "", "", "", "Processed", date(2025, 11, 18)]])

        rows = read_csv(store.path)
        assert count == 1
        assert rows[0] == OUTPUT_COLUMNS
        assert rows[1] == ["2025-11-17T08:00:00", "Ann", "ann@x.io", "", "", "", "Processed", "2025-11-17"]
        assert rows[2][7] == "2025-11-18"
        assert len(rows) == 3

    def test_empty_append_does_not_create_file(self, tmp_path):
        store = CsvTableStore(tmp_path / "Error Log.csv", ["timestamp"])

        assert store.append_rows([]) == 0
        assert not store.path.exists()

    def test_workbook_resolves_table_names(self, tmp_path):
        table = CsvWorkbook(tmp_path).table("Error Log")

        assert table.path == tmp_path / "Error Log.csv"
        assert table.name == "Error Log"
