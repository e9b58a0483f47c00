"""
Pytest configuration and fixtures for contact-pipeline tests

This module provides shared fixtures and in-memory collaborators for unit,
integration, and E2E tests.
"""
import itertools
from typing import Any, Callable, Generator, Sequence

import pytest
from testcontainers.postgres import PostgresContainer

from contact_pipeline.core.models import ERROR_COLUMNS, OUTPUT_COLUMNS
from contact_pipeline.notify import Notifier
from contact_pipeline.pipeline import ContactPipeline
from contact_pipeline.resume import ResumeController, Scheduler
from contact_pipeline.resume.checkpoint_store import CheckpointStore
from contact_pipeline.stores import TabularStore
from contact_pipeline.stores.connection import DatabaseConnectionPool


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that test the full pipeline"
    )


# =======================
# SAMPLE DATA
# =======================

SOURCE_HEADER = [
    "Name",
    "Email",
    "Phone",
    "Street Address",
    "City",
    "State",
    "Zip Code",
    "Category",
]


def contact_row(index: int) -> list[str]:
    """A valid source row, distinct per index."""
    return [
        f"contact number{index}",
        f"Contact{index}@Example.COM",
        f"555-010-{index:04d}",
        f"{index} Main St",
        "Springfield",
        "IL",
        "62704",
        ["cat a", "CAT B", "Cat C", "other"][index % 4],
    ]


def invalid_row(index: int) -> list[str]:
    """A source row that fails email validation."""
    return [f"broken {index}", f"broken{index}-at-example.com", "", "", "", "", "", "cat a"]


# =======================
# IN-MEMORY COLLABORATORS
# =======================

class MemoryTableStore(TabularStore):
    """
    Table held in memory.

    Without columns, `rows` is read as-is (first row is the header).
    With columns, read_rows() prepends them as the header.
    """

    def __init__(
        self,
        name: str,
        columns: Sequence[str] | None = None,
        rows: Sequence[Sequence[Any]] | None = None,
        on_append: Callable[[Sequence[Sequence[Any]]], None] | None = None,
    ):
        super().__init__(name, columns)
        self.rows = [list(row) for row in rows or []]
        self.append_calls = 0
        self.on_append = on_append

    def read_rows(self) -> list[list[Any]]:
        if self.columns is None:
            return [list(row) for row in self.rows]
        return [list(self.columns)] + [list(row) for row in self.rows]

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> int:
        if not rows:
            return 0
        self.rows.extend(list(row) for row in rows)
        self.append_calls += 1
        if self.on_append:
            self.on_append(rows)
        return len(rows)


class MemoryCheckpointStore(CheckpointStore):
    def __init__(self):
        self.checkpoint = None
        self.saves = 0

    def load(self):
        return self.checkpoint

    def save(self, checkpoint):
        self.checkpoint = checkpoint
        self.saves += 1

    def clear(self):
        self.checkpoint = None


class FakeScheduler(Scheduler):
    """Records scheduled callbacks; tests fire them by hand."""

    def __init__(self):
        self.pending: dict[str, Callable[[], object]] = {}
        self.delays: list[float] = []
        self.cancelled: list[str] = []
        self._ids = itertools.count(1)

    def schedule_once(self, delay_seconds, callback):
        trigger_id = f"trigger-{next(self._ids)}"
        self.pending[trigger_id] = callback
        self.delays.append(delay_seconds)
        return trigger_id

    def cancel(self, trigger_id):
        self.cancelled.append(trigger_id)
        return self.pending.pop(trigger_id, None) is not None

    def fire(self, trigger_id):
        """Fire like a real timer: the job is gone before the callback runs."""
        callback = self.pending.pop(trigger_id)
        return callback()


class RecordingNotifier(Notifier):
    def __init__(self, recipients=("ops@example.com",)):
        super().__init__(recipients)
        self.messages: list[tuple[str, str]] = []
        self.completions = []

    def send(self, subject, body):
        self.messages.append((subject, body))

    def notify_completion(self, counters, elapsed_seconds):
        self.completions.append((counters, elapsed_seconds))
        super().notify_completion(counters, elapsed_seconds)


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class PipelineHarness:
    """A ContactPipeline wired to in-memory collaborators."""

    def __init__(
        self,
        rows: Sequence[Sequence[Any]],
        batch_size: int = 50,
        time_budget_seconds: float = 280.0,
        seconds_per_write: float = 0.0,
    ):
        self.clock = FakeClock()
        self.source = MemoryTableStore("Raw Data", rows=[SOURCE_HEADER] + [list(r) for r in rows])
        self.output = MemoryTableStore(
            "Processed Data",
            OUTPUT_COLUMNS,
            on_append=lambda _rows: self.clock.advance(seconds_per_write),
        )
        self.error_log = MemoryTableStore("Error Log", ERROR_COLUMNS)
        self.checkpoints = MemoryCheckpointStore()
        self.scheduler = FakeScheduler()
        self.notifier = RecordingNotifier()
        self.controller = ResumeController(self.checkpoints, self.scheduler, resume_delay_seconds=60)
        self.pipeline = ContactPipeline(
            source=self.source,
            output=self.output,
            error_log=self.error_log,
            controller=self.controller,
            notifier=self.notifier,
            batch_size=batch_size,
            time_budget_seconds=time_budget_seconds,
            clock=self.clock,
        )


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def memory_checkpoints() -> MemoryCheckpointStore:
    return MemoryCheckpointStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """
    Start PostgreSQL container for integration tests

    Skips the dependent tests when Docker is not available.
    """
    container = PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_pipeline",
        password="test_password",
        dbname="test_contacts",
    )
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"Docker is not available for integration tests: {e}")

    yield container

    container.stop()


@pytest.fixture
def db_pool(postgres_container) -> Generator[DatabaseConnectionPool, None, None]:
    """Open connection pool against the test container"""
    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_contacts",
        user="test_pipeline",
        password="test_password",
    )
    pool.open()

    yield pool

    pool.close()
