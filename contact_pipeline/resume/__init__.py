"""
Checkpoint/resume: time budget, checkpoint persistence and scheduled resumption.
"""

from .budget import DEFAULT_TIME_BUDGET_SECONDS, TimeBudget
from .checkpoint_store import CheckpointStore, JsonFileCheckpointStore, PostgresCheckpointStore
from .controller import ResumeController
from .scheduler import DEFAULT_RESUME_DELAY_SECONDS, APSchedulerScheduler, Scheduler

__all__ = [
    "DEFAULT_TIME_BUDGET_SECONDS",
    "DEFAULT_RESUME_DELAY_SECONDS",
    "TimeBudget",
    "CheckpointStore",
    "JsonFileCheckpointStore",
    "PostgresCheckpointStore",
    "ResumeController",
    "Scheduler",
    "APSchedulerScheduler",
]
