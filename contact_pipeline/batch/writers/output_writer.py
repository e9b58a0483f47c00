"""
Writes canonical records to the output table.
"""

from typing import Sequence

from contact_pipeline.core.models import CanonicalRecord
from contact_pipeline.observability import metrics
from contact_pipeline.stores import TabularStore


class OutputWriter:
    """
    Appends canonical records in the fixed output column order.
    """

    def __init__(self, store: TabularStore):
        self.store = store

    def write_batch(self, records: Sequence[CanonicalRecord]) -> int:
        """
        Append one chunk of records as a single write.

        Returns:
            Number of rows written (0 for an empty chunk, without touching the store)
        """
        if not records:
            return 0

        count = self.store.append_rows([record.to_row() for record in records])
        metrics.increment_counter(metrics.batches_written_total)
        return count
