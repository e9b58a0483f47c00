"""
One-time delayed callbacks used to resume a suspended run.
"""

import threading
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

from contact_pipeline.observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_RESUME_DELAY_SECONDS = 60.0


class Scheduler(ABC):
    """Create a one-time delayed callback; cancel a callback by identifier."""

    @abstractmethod
    def schedule_once(self, delay_seconds: float, callback: Callable[[], object]) -> str:
        """
        Run callback once after delay_seconds.

        Returns:
            Trigger identifier usable with cancel()
        """
        pass

    @abstractmethod
    def cancel(self, trigger_id: str) -> bool:
        """
        Remove a pending callback.

        Idempotent: an unknown or already fired trigger is a no-op.

        Returns:
            True when a pending callback was removed
        """
        pass


class APSchedulerScheduler(Scheduler):
    """
    Scheduler backed by APScheduler's BackgroundScheduler.

    Jobs live in memory, so the owning process has to stay alive until
    they fire; wait_until_idle() blocks until no callback is pending or
    running.
    """

    def __init__(self, scheduler: BackgroundScheduler | None = None):
        self._scheduler = scheduler or BackgroundScheduler(timezone=timezone.utc)
        self._pending: set[str] = set()
        self._running = 0
        self._lock = threading.Lock()

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()

    def shutdown(self, wait: bool = True) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)

    def schedule_once(self, delay_seconds: float, callback: Callable[[], object]) -> str:
        self.start()
        trigger_id = uuid.uuid4().hex
        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay_seconds)

        with self._lock:
            self._pending.add(trigger_id)
        self._scheduler.add_job(
            self._run,
            trigger="date",
            run_date=run_date,
            args=[trigger_id, callback],
            id=trigger_id,
            name=f"resume-{trigger_id[:8]}",
            misfire_grace_time=None,
        )

        logger.info(
            f"Scheduled resumption {trigger_id} at {run_date.isoformat()}",
            extra={"trigger_id": trigger_id, "delay_seconds": delay_seconds},
        )
        return trigger_id

    def cancel(self, trigger_id: str) -> bool:
        with self._lock:
            self._pending.discard(trigger_id)

        try:
            self._scheduler.remove_job(trigger_id)
        except JobLookupError:
            logger.debug(f"Trigger {trigger_id} not pending, nothing to cancel")
            return False

        logger.info(f"Cancelled resumption {trigger_id}", extra={"trigger_id": trigger_id})
        return True

    def has_pending(self) -> bool:
        with self._lock:
            return bool(self._pending) or self._running > 0

    def wait_until_idle(self, poll_interval: float = 1.0) -> None:
        """Block until every scheduled callback has fired or been cancelled."""
        while self.has_pending():
            time.sleep(poll_interval)

    def _run(self, trigger_id: str, callback: Callable[[], object]) -> None:
        # Counted as running before the callback can cancel its own trigger
        with self._lock:
            self._running += 1
        try:
            callback()
        finally:
            with self._lock:
                self._pending.discard(trigger_id)
                self._running -= 1
