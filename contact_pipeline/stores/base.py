"""
Tabular store interface shared by the source, output and error tables.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence


class StoreError(Exception):
    """Raised when a table cannot be read or appended to."""


class TabularStore(ABC):
    """
    A named table with a header row and append-only data rows.

    Implementations must write all rows of one append call together, so
    that a chunk of output is either fully written or not at all.
    """

    def __init__(self, name: str, columns: Sequence[str] | None = None):
        """
        Initialize store.

        Args:
            name: Table name (e.g. "Raw Data")
            columns: Header used when the store has to create the table
        """
        self.name = name
        self.columns = list(columns) if columns else None

    @abstractmethod
    def read_rows(self) -> list[list[Any]]:
        """
        Read the whole table.

        Returns:
            Header row followed by data rows; [] for an empty table

        Raises:
            StoreError: If the table does not exist or cannot be read
        """
        pass

    @abstractmethod
    def append_rows(self, rows: Sequence[Sequence[Any]]) -> int:
        """
        Append data rows after the last existing row.

        Returns:
            Number of rows appended

        Raises:
            StoreError: If the rows cannot be written
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
