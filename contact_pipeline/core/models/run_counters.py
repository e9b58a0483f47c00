"""
Per-invocation counters and the outcome reported by a pipeline run.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .checkpoint import ResumeCheckpoint


class RunCounters(BaseModel):
    """
    Counters scoped to one invocation (fresh or resumed).

    Attributes:
        processed_count: Records written to the output table
        error_count: Records routed to the error log
        start_time: When the invocation started
    """

    processed_count: int = Field(0, ge=0)
    error_count: int = Field(0, ge=0)
    start_time: datetime = Field(default_factory=datetime.now)


class RunOutcome(BaseModel):
    """
    What a single start/resume invocation ended with.

    Attributes:
        status: completed, suspended (checkpoint taken), empty (no source rows)
                or failed (run-level error)
        counters: Counters for this invocation
        elapsed_seconds: Wall-clock time spent
        checkpoint: The persisted checkpoint when suspended
        error: Error text when failed
    """

    status: Literal["completed", "suspended", "empty", "failed"]
    counters: RunCounters = Field(default_factory=RunCounters)
    elapsed_seconds: float = 0.0
    checkpoint: ResumeCheckpoint | None = None
    error: str | None = None
