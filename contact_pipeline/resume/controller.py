"""
Checkpoint/resume controller.

Two states: Fresh (no checkpoint) and Pending (a prior run exceeded its
time budget and left a checkpoint plus a scheduled resumption).

    Fresh/Pending --budget exceeded--> Pending   (suspend)
    Pending       --next invocation--> Fresh     (enter: cancel trigger, clear checkpoint)
"""

from typing import Callable

from contact_pipeline.core.models import ResumeCheckpoint
from contact_pipeline.observability import metrics
from contact_pipeline.observability.logger import get_logger

from .checkpoint_store import CheckpointStore
from .scheduler import DEFAULT_RESUME_DELAY_SECONDS, Scheduler

logger = get_logger(__name__)


class ResumeController:
    """
    Decides where an invocation starts and persists where it stopped.

    Usage:
        controller = ResumeController(store, scheduler)
        offset = controller.enter(resuming=True)
        ...
        if not result.completed:
            controller.suspend(result.next_offset, result.total_length, pipeline.resume)
    """

    def __init__(
        self,
        checkpoint_store: CheckpointStore,
        scheduler: Scheduler,
        resume_delay_seconds: float = DEFAULT_RESUME_DELAY_SECONDS,
    ):
        """
        Initialize controller.

        Args:
            checkpoint_store: Single-slot checkpoint persistence
            scheduler: Creates and cancels the delayed resumption
            resume_delay_seconds: Delay before the scheduled resumption fires
        """
        if resume_delay_seconds < 0:
            raise ValueError(f"resume_delay_seconds must not be negative, got {resume_delay_seconds}")

        self.checkpoint_store = checkpoint_store
        self.scheduler = scheduler
        self.resume_delay_seconds = resume_delay_seconds
        self.consumed: ResumeCheckpoint | None = None

    def enter(self, resuming: bool) -> int:
        """
        Entry decision for a new invocation.

        A live checkpoint is always consumed: its trigger is cancelled (a
        no-op if it already fired) and the checkpoint is deleted. Only a
        resume starts from the stored offset; a fresh start discards it.

        Args:
            resuming: True for the resume operation, False for start

        Returns:
            Offset of the first record to process
        """
        checkpoint = self.checkpoint_store.load()
        self.consumed = None

        if checkpoint is None:
            if resuming:
                logger.info("No checkpoint found, resuming from the beginning")
            return 0

        self.scheduler.cancel(checkpoint.trigger_id)
        self.checkpoint_store.clear()

        if not resuming:
            logger.warning(
                f"Discarding checkpoint at offset {checkpoint.next_offset} for a fresh start",
                extra={"next_offset": checkpoint.next_offset, "trigger_id": checkpoint.trigger_id},
            )
            return 0

        self.consumed = checkpoint
        logger.info(
            f"Resuming at offset {checkpoint.next_offset} of {checkpoint.total_length}",
            extra={"next_offset": checkpoint.next_offset, "total_length": checkpoint.total_length},
        )
        return checkpoint.next_offset

    def verify_source(self, total_length: int) -> None:
        """
        Warn when the re-fetched source no longer matches the checkpoint.

        Records are re-read from the source on resume, so rows added or
        removed before the stored offset shift what gets processed.
        """
        if self.consumed is None or self.consumed.total_length == total_length:
            return

        logger.warning(
            f"Source changed during pause: checkpoint saw {self.consumed.total_length} records, "
            f"source now has {total_length}",
            extra={"checkpoint_total": self.consumed.total_length, "source_total": total_length},
        )

    def suspend(
        self,
        next_offset: int,
        total_length: int,
        resume_callback: Callable[[], object],
    ) -> ResumeCheckpoint:
        """
        Exit decision after the time budget ran out.

        Schedules a one-time resumption and persists where to continue.

        A trigger is never left behind without its checkpoint: if the save
        fails the trigger is cancelled before the error propagates.

        Returns:
            The persisted checkpoint
        """
        trigger_id = self.scheduler.schedule_once(self.resume_delay_seconds, resume_callback)
        checkpoint = ResumeCheckpoint(
            next_offset=next_offset,
            total_length=total_length,
            trigger_id=trigger_id,
        )
        try:
            self.checkpoint_store.save(checkpoint)
        except Exception:
            self.scheduler.cancel(trigger_id)
            logger.error(
                f"Failed to save checkpoint, cancelled resumption trigger {trigger_id}",
                extra={"trigger_id": trigger_id},
            )
            raise
        metrics.increment_counter(metrics.checkpoints_total)

        logger.info(
            f"Checkpoint saved at offset {next_offset} of {total_length}",
            extra={"next_offset": next_offset, "total_length": total_length, "trigger_id": trigger_id},
        )
        return checkpoint
