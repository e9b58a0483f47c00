"""
Writes failed records to the error log table.
"""

from contact_pipeline.core.models import ErrorEntry
from contact_pipeline.stores import TabularStore


class ErrorLogWriter:
    """
    Appends one row per failed record: timestamp, record JSON, message, detail.
    """

    def __init__(self, store: TabularStore):
        self.store = store

    def write(self, entry: ErrorEntry) -> None:
        self.store.append_rows([entry.to_row()])
