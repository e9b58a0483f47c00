"""
Readers for source tables.
"""

from .table_reader import REQUIRED_COLUMNS, TableReader

__all__ = ["REQUIRED_COLUMNS", "TableReader"]
