"""
Single-slot persistence for ResumeCheckpoint.

A store holds at most one checkpoint: save() replaces, clear() deletes.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from psycopg import Error as PsycopgError
from psycopg import sql

from contact_pipeline.core.models import ResumeCheckpoint
from contact_pipeline.observability.logger import get_logger
from contact_pipeline.stores.base import StoreError
from contact_pipeline.stores.connection import DatabaseConnectionPool

logger = get_logger(__name__)


class CheckpointStore(ABC):
    """Create/read/delete operations on the single live checkpoint."""

    @abstractmethod
    def load(self) -> ResumeCheckpoint | None:
        """Return the live checkpoint, or None when there is none."""
        pass

    @abstractmethod
    def save(self, checkpoint: ResumeCheckpoint) -> None:
        """Persist the checkpoint, replacing any existing one."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete the live checkpoint; no-op when there is none."""
        pass


class JsonFileCheckpointStore(CheckpointStore):
    """
    Keeps the checkpoint in one JSON file.

    Writes go to a temporary file that is then renamed over the target,
    so a reader never sees a half-written checkpoint.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> ResumeCheckpoint | None:
        if not self.path.exists():
            return None

        try:
            return ResumeCheckpoint.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as e:
            raise StoreError(f"Unreadable checkpoint file {self.path}: {e}") from e

    def save(self, checkpoint: ResumeCheckpoint) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(checkpoint.model_dump_json())
            os.replace(tmp_path, self.path)
        except OSError as e:
            Path(tmp_path).unlink(missing_ok=True)
            raise StoreError(f"Failed to write checkpoint {self.path}: {e}") from e

        logger.debug(f"Checkpoint saved to {self.path}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class PostgresCheckpointStore(CheckpointStore):
    """
    Keeps the checkpoint in a one-row PostgreSQL table.

    The slot column is constrained to a single value, so an upsert always
    replaces the previous checkpoint.
    """

    def __init__(self, pool: DatabaseConnectionPool, table: str = "resume_checkpoint"):
        self.pool = pool
        self.table = table
        self._table = sql.Identifier(table)
        self._ensured = False

    def _ensure_table(self) -> None:
        if self._ensured:
            return
        self.pool.execute_command(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    slot SMALLINT PRIMARY KEY DEFAULT 1 CHECK (slot = 1),
                    payload JSONB NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            ).format(self._table)
        )
        self._ensured = True

    def load(self) -> ResumeCheckpoint | None:
        try:
            self._ensure_table()
            rows = self.pool.execute_query(
                sql.SQL("SELECT payload FROM {} WHERE slot = 1").format(self._table)
            )
        except PsycopgError as e:
            raise StoreError(f"Failed to load checkpoint: {e}") from e

        if not rows:
            return None
        return ResumeCheckpoint.model_validate(rows[0]["payload"])

    def save(self, checkpoint: ResumeCheckpoint) -> None:
        try:
            self._ensure_table()
            self.pool.execute_command(
                sql.SQL(
                    """
                    INSERT INTO {} (slot, payload, updated_at)
                    VALUES (1, %s::jsonb, NOW())
                    ON CONFLICT (slot) DO UPDATE SET
                        payload = EXCLUDED.payload,
                        updated_at = EXCLUDED.updated_at
                    """
                ).format(self._table),
                (checkpoint.model_dump_json(),),
            )
        except PsycopgError as e:
            raise StoreError(f"Failed to save checkpoint: {e}") from e

    def clear(self) -> None:
        try:
            self._ensure_table()
            self.pool.execute_command(
                sql.SQL("DELETE FROM {} WHERE slot = 1").format(self._table)
            )
        except PsycopgError as e:
            raise StoreError(f"Failed to clear checkpoint: {e}") from e
