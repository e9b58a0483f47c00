"""
Prometheus metrics collection for contact-pipeline

This module provides metrics instrumentation for monitoring
record throughput, data quality and checkpoint activity.
"""
from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    write_to_textfile,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# RECORD METRICS
# =======================

records_total = Counter(
    name="contacts_records_total",
    documentation="Total number of contact records handled",
    labelnames=["status"],  # status: processed, error
    registry=REGISTRY,
)

validation_failures_total = Counter(
    name="contacts_validation_failures_total",
    documentation="Total number of per-record failures by kind",
    labelnames=["kind"],
    registry=REGISTRY,
)

# =======================
# BATCH METRICS
# =======================

batches_written_total = Counter(
    name="contacts_batches_written_total",
    documentation="Total number of chunk appends to the output table",
    registry=REGISTRY,
)

batch_size = Histogram(
    name="contacts_batch_size_records",
    documentation="Number of records in each chunk",
    buckets=[1, 10, 25, 50, 100, 250, 500, 1000],
    registry=REGISTRY,
)

# =======================
# RUN METRICS
# =======================

checkpoints_total = Counter(
    name="contacts_checkpoints_total",
    documentation="Total number of checkpoints persisted after exceeding the time budget",
    registry=REGISTRY,
)

runs_total = Counter(
    name="contacts_runs_total",
    documentation="Total number of pipeline invocations by outcome",
    labelnames=["status"],  # status: completed, suspended, empty, failed
    registry=REGISTRY,
)

run_duration_seconds = Histogram(
    name="contacts_run_duration_seconds",
    documentation="Wall-clock time spent in one pipeline invocation",
    buckets=[1.0, 5.0, 15.0, 30.0, 60.0, 120.0, 240.0, 300.0],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def write_metrics(path: str | Path) -> None:
    """Write the registry to a node-exporter textfile."""
    write_to_textfile(str(path), REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)
