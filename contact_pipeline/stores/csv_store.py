"""
CSV-backed tables: one "<name>.csv" file per table inside a data directory.
"""

import csv
import io
from datetime import date, datetime
from pathlib import Path
from typing import Any, Sequence

from contact_pipeline.observability.logger import get_logger

from .base import StoreError, TabularStore

logger = get_logger(__name__)


def _cell(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class CsvTableStore(TabularStore):
    """
    A table stored as a CSV file.

    The header row is written on the first append when the file does not
    exist yet. Each append renders the whole chunk in memory and writes it
    with a single call.
    """

    def __init__(self, path: str | Path, columns: Sequence[str] | None = None):
        self.path = Path(path)
        super().__init__(self.path.stem, columns)

    def read_rows(self) -> list[list[Any]]:
        if not self.path.exists():
            raise StoreError(f"Table file not found: {self.path}")

        try:
            with open(self.path, newline="", encoding="utf-8") as f:
                return [row for row in csv.reader(f)]
        except (OSError, csv.Error) as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> int:
        if not rows:
            return 0

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        needs_header = not self.path.exists() or self.path.stat().st_size == 0
        if needs_header and self.columns:
            writer.writerow(self.columns)
        for row in rows:
            writer.writerow([_cell(value) for value in row])

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", newline="", encoding="utf-8") as f:
                f.write(buffer.getvalue())
        except OSError as e:
            raise StoreError(f"Failed to append to {self.path}: {e}") from e

        logger.debug(f"Appended {len(rows)} rows to {self.path}")
        return len(rows)


class CsvWorkbook:
    """
    Resolves table names to CSV files inside one data directory.

    Usage:
        workbook = CsvWorkbook("data")
        source = workbook.table("Raw Data")   # data/Raw Data.csv
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def table(self, name: str, columns: Sequence[str] | None = None) -> CsvTableStore:
        return CsvTableStore(self.data_dir / f"{name}.csv", columns)
