"""
Tabular stores for source, output and error tables.
"""

from .base import StoreError, TabularStore
from .csv_store import CsvTableStore, CsvWorkbook
from .postgres_store import PostgresTableStore

__all__ = [
    "StoreError",
    "TabularStore",
    "CsvTableStore",
    "CsvWorkbook",
    "PostgresTableStore",
]
