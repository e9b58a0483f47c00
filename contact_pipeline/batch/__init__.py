"""
Batch processing: reading source rows, running chunks, writing results.
"""

from .readers import TableReader
from .runner import DEFAULT_BATCH_SIZE, BatchRunner, BatchRunResult, partition
from .writers import ErrorLogWriter, OutputWriter

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "BatchRunner",
    "BatchRunResult",
    "ErrorLogWriter",
    "OutputWriter",
    "TableReader",
    "partition",
]
