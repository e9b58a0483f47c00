"""
ResumeCheckpoint model: the single persisted progress marker.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class ResumeCheckpoint(BaseModel):
    """
    Progress marker written when a run exceeds its time budget.

    At most one checkpoint is live at a time. It is consumed and deleted
    by the next invocation that finds it.

    Attributes:
        next_offset: First record offset not yet processed
        total_length: Number of source records seen when the checkpoint was taken
        trigger_id: Identifier of the scheduled resumption
        created_at: When the checkpoint was persisted
    """

    next_offset: int = Field(..., ge=0)
    total_length: int = Field(..., ge=0)
    trigger_id: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_offset_within_total(self) -> "ResumeCheckpoint":
        """Validate that next_offset does not run past total_length."""
        if self.next_offset > self.total_length:
            raise ValueError(
                f"next_offset ({self.next_offset}) exceeds total_length ({self.total_length})"
            )
        return self
