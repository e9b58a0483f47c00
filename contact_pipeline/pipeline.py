"""
Contact pipeline orchestration.

Coordinates the flow: checkpoint entry → read source → run chunks →
checkpoint or completion report. Two entry operations exist: start
(fresh run) and resume (continue from the checkpoint, invoked by the
scheduler).
"""

import time
import traceback
from typing import Callable

from contact_pipeline.batch import BatchRunner, ErrorLogWriter, OutputWriter, TableReader
from contact_pipeline.config import PipelineConfig
from contact_pipeline.core.models import ERROR_COLUMNS, OUTPUT_COLUMNS, RunCounters, RunOutcome
from contact_pipeline.notify import LoggingNotifier, Notifier, SmtpNotifier
from contact_pipeline.observability import metrics
from contact_pipeline.observability.logger import get_logger, log_operation
from contact_pipeline.resume import (
    JsonFileCheckpointStore,
    PostgresCheckpointStore,
    ResumeController,
    Scheduler,
    TimeBudget,
)
from contact_pipeline.stores import CsvWorkbook, PostgresTableStore, TabularStore
from contact_pipeline.stores.connection import DatabaseConnectionPool

logger = get_logger(__name__)


class ContactPipeline:
    """
    Orchestrates one invocation of the contact cleaning pipeline.

    Flow:
    1. Consume any checkpoint to decide the starting offset
    2. Read all source records
    3. Normalize chunk by chunk, routing failures to the error log
    4. On budget exhaustion, checkpoint and schedule a resumption
    5. Otherwise, send a completion report

    Run-level errors are caught here, reported through the notifier and
    returned as a failed outcome; no checkpoint is written for them.
    """

    def __init__(
        self,
        source: TabularStore,
        output: TabularStore,
        error_log: TabularStore,
        controller: ResumeController,
        notifier: Notifier,
        batch_size: int = 50,
        time_budget_seconds: float = 280.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize pipeline.

        Args:
            source: Source table of raw contacts
            output: Output table for canonical records
            error_log: Error log table
            controller: Checkpoint/resume controller
            notifier: Completion and failure reports
            batch_size: Records per chunk
            time_budget_seconds: Elapsed time after which the run checkpoints
            clock: Monotonic clock, injectable for tests
        """
        self.reader = TableReader(source)
        self.runner = BatchRunner(OutputWriter(output), ErrorLogWriter(error_log), batch_size)
        self.controller = controller
        self.notifier = notifier
        self.time_budget_seconds = time_budget_seconds
        self.clock = clock

    def start(self) -> RunOutcome:
        """Fresh run from the first record."""
        return self._run(resuming=False)

    def resume(self) -> RunOutcome:
        """Continue from the checkpoint, or from the first record if there is none."""
        return self._run(resuming=True)

    def _run(self, resuming: bool) -> RunOutcome:
        budget = TimeBudget(self.time_budget_seconds, clock=self.clock)
        budget.start()
        run = "resume" if resuming else "start"

        try:
            with log_operation("Processing contacts", logger=logger, run=run):
                outcome = self._process(resuming, budget)
        except Exception as e:
            outcome = self._handle_failure(e, budget)

        metrics.increment_counter(metrics.runs_total, status=outcome.status)
        metrics.observe_histogram(metrics.run_duration_seconds, outcome.elapsed_seconds)
        return outcome

    def _process(self, resuming: bool, budget: TimeBudget) -> RunOutcome:
        start_offset = self.controller.enter(resuming)

        records = self.reader.read()
        if not records:
            logger.info("No data to process")
            return RunOutcome(status="empty", elapsed_seconds=budget.elapsed())

        self.controller.verify_source(len(records))
        if start_offset > len(records):
            logger.warning(
                f"Checkpoint offset {start_offset} is past the end of the source ({len(records)} records)"
            )
            start_offset = len(records)

        result = self.runner.run_batches(records, start_offset, budget)

        if not result.completed:
            checkpoint = self.controller.suspend(result.next_offset, result.total_length, self.resume)
            return RunOutcome(
                status="suspended",
                counters=result.counters,
                elapsed_seconds=budget.elapsed(),
                checkpoint=checkpoint,
            )

        elapsed = budget.elapsed()
        logger.info(
            f"Data processing complete: {result.counters.processed_count} processed, "
            f"{result.counters.error_count} errors in {elapsed:.3f}s",
            extra={
                "processed_count": result.counters.processed_count,
                "error_count": result.counters.error_count,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        self.notifier.notify_completion(result.counters, elapsed)
        return RunOutcome(status="completed", counters=result.counters, elapsed_seconds=elapsed)

    def _handle_failure(self, error: Exception, budget: TimeBudget) -> RunOutcome:
        detail = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        logger.error(f"Global error: {error}", exc_info=error)

        try:
            self.notifier.notify_failure(str(error), detail)
        except Exception:
            logger.error("Failed to send failure notification", exc_info=True)

        return RunOutcome(
            status="failed",
            counters=RunCounters(),
            elapsed_seconds=budget.elapsed(),
            error=str(error),
        )


def create_notifier(config: PipelineConfig) -> Notifier:
    """SMTP notifier when SMTP is configured, logging notifier otherwise."""
    if config.smtp is None:
        return LoggingNotifier(config.notification_recipients)

    return SmtpNotifier(
        recipients=config.notification_recipients,
        host=config.smtp.host,
        port=config.smtp.port,
        sender=config.smtp.sender,
        username=config.smtp.username,
        password=config.smtp.password,
        use_tls=config.smtp.use_tls,
    )


def create_pipeline(
    config: PipelineConfig,
    scheduler: Scheduler,
    pool: DatabaseConnectionPool | None = None,
    notifier: Notifier | None = None,
) -> ContactPipeline:
    """
    Wire a pipeline from configuration.

    Args:
        config: Pipeline configuration
        scheduler: Scheduler for resumptions
        pool: Open connection pool, required for the postgres backend
        notifier: Overrides the notifier derived from config

    Returns:
        ContactPipeline ready for start() or resume()
    """
    if config.backend == "postgres":
        if pool is None:
            raise ValueError("The postgres backend needs an open DatabaseConnectionPool")

        source = PostgresTableStore(pool, config.source_name)
        output = PostgresTableStore(pool, config.output_name, OUTPUT_COLUMNS)
        error_log = PostgresTableStore(pool, config.error_log_name, ERROR_COLUMNS)
        checkpoint_store = PostgresCheckpointStore(pool)
    else:
        workbook = CsvWorkbook(config.data_dir)
        source = workbook.table(config.source_name)
        output = workbook.table(config.output_name, OUTPUT_COLUMNS)
        error_log = workbook.table(config.error_log_name, ERROR_COLUMNS)
        checkpoint_store = JsonFileCheckpointStore(config.resolved_checkpoint_path)

    controller = ResumeController(checkpoint_store, scheduler, config.resume_delay_seconds)

    return ContactPipeline(
        source=source,
        output=output,
        error_log=error_log,
        controller=controller,
        notifier=notifier or create_notifier(config),
        batch_size=config.batch_size,
        time_budget_seconds=config.time_budget_seconds,
    )
