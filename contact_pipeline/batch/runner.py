"""
Batch runner: sequences records into fixed-size chunks and normalizes them.

Flow per chunk: normalize each record → route failures to the error log →
append successes to the output table in one write.
"""

from typing import Iterator, Sequence, TypeVar

from pydantic import BaseModel

from contact_pipeline.batch.writers import ErrorLogWriter, OutputWriter
from contact_pipeline.core.models import CanonicalRecord, ErrorEntry, RawRecord, RunCounters
from contact_pipeline.core.normalizer import normalize
from contact_pipeline.observability import metrics
from contact_pipeline.observability.logger import get_logger
from contact_pipeline.resume.budget import TimeBudget

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 50

T = TypeVar("T")


def partition(
    records: Sequence[T],
    batch_size: int,
    start_offset: int = 0,
) -> Iterator[tuple[int, Sequence[T]]]:
    """
    Split records[start_offset:] into consecutive chunks.

    Args:
        records: Full record sequence
        batch_size: Maximum chunk length
        start_offset: Offset of the first record to include

    Yields:
        (offset, chunk) pairs, where offset is the chunk's first index in records
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    for offset in range(start_offset, len(records), batch_size):
        yield offset, records[offset:offset + batch_size]


class BatchRunResult(BaseModel):
    """
    Outcome of one run_batches() call.

    Attributes:
        counters: Counters for this invocation
        next_offset: First unprocessed offset (total_length when completed)
        total_length: Number of records the run was given
        completed: False when the run stopped early on the time budget
    """

    counters: RunCounters
    next_offset: int
    total_length: int
    completed: bool


class BatchRunner:
    """
    Applies the normalizer to records chunk by chunk.

    A failing record never aborts its chunk or the run: it is written to
    the error log and counted. Errors raised by the output or error
    tables themselves propagate to the caller.
    """

    def __init__(
        self,
        output_writer: OutputWriter,
        error_writer: ErrorLogWriter,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        """
        Initialize batch runner.

        Args:
            output_writer: Destination for canonical records
            error_writer: Destination for failed records
            batch_size: Records per chunk
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self.output_writer = output_writer
        self.error_writer = error_writer
        self.batch_size = batch_size

    def run_batches(
        self,
        records: Sequence[RawRecord],
        start_offset: int = 0,
        budget: TimeBudget | None = None,
    ) -> BatchRunResult:
        """
        Process records from start_offset to the end, or until the budget runs out.

        The budget is consulted before every chunk except the first one of
        this call, so each invocation makes progress.

        Args:
            records: Full record sequence
            start_offset: Offset of the first record to process
            budget: Time budget; None means unbounded

        Returns:
            BatchRunResult with this invocation's counters
        """
        total_length = len(records)
        if not 0 <= start_offset <= total_length:
            raise ValueError(
                f"start_offset {start_offset} outside of record range 0..{total_length}"
            )

        counters = RunCounters()

        for index, (offset, chunk) in enumerate(partition(records, self.batch_size, start_offset)):
            if index > 0 and budget is not None and budget.exceeded():
                logger.warning(
                    f"Time budget exceeded after {budget.elapsed():.1f}s, stopping at offset {offset}",
                    extra={"next_offset": offset, "total_length": total_length},
                )
                return BatchRunResult(
                    counters=counters,
                    next_offset=offset,
                    total_length=total_length,
                    completed=False,
                )

            self._process_chunk(offset, chunk, counters)

        return BatchRunResult(
            counters=counters,
            next_offset=total_length,
            total_length=total_length,
            completed=True,
        )

    def _process_chunk(self, offset: int, chunk: Sequence[RawRecord], counters: RunCounters) -> None:
        successes: list[CanonicalRecord] = []

        for raw in chunk:
            result = normalize(raw)
            if result.ok:
                successes.append(result.record)
                continue

            failure = result.failure
            self.error_writer.write(ErrorEntry.from_record(raw, failure.message, failure.detail))
            counters.error_count += 1
            metrics.increment_counter(metrics.records_total, status="error")
            metrics.increment_counter(metrics.validation_failures_total, kind=failure.kind)

        written = self.output_writer.write_batch(successes)
        counters.processed_count += written
        metrics.increment_counter(metrics.records_total, written, status="processed")
        metrics.observe_histogram(metrics.batch_size, len(chunk))

        logger.debug(
            f"Chunk at offset {offset}: {written} processed, {len(chunk) - written} failed",
            extra={"offset": offset, "chunk_size": len(chunk)},
        )
