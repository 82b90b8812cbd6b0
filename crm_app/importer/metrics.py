"""Prometheus metrics helpers for the importer."""

from __future__ import annotations

from typing import Literal, Mapping

from prometheus_client import Counter, Gauge, Histogram

_importer_enabled_gauge = Gauge(
    "importer_enabled",
    "Whether the importer CLI is enabled (1) or disabled (0).",
)
_monica_runs_counter = Counter(
    "importer_monica_runs_total",
    "Monica import runs by final status.",
    ["status"],
)
_monica_run_duration = Histogram(
    "importer_monica_run_duration_seconds",
    "Duration of Monica import runs in seconds.",
    buckets=(0.1, 0.5, 1, 2, 5, 10, 30, 60, 120, 300),
)
_monica_rows_counter = Counter(
    "importer_monica_rows_total",
    "Destination rows created by the Monica importer, by entity.",
    ["entity"],
)
_monica_row_errors_counter = Counter(
    "importer_monica_row_errors_total",
    "Monica rows that failed to insert.",
)
_monica_skipped_counter = Counter(
    "importer_monica_rows_skipped_total",
    "Monica rows skipped because they could not be resolved, by entity.",
    ["entity"],
)


def record_importer_enabled(enabled: bool) -> None:
    _importer_enabled_gauge.set(1 if enabled else 0)


def record_monica_run(
    *,
    status: Literal["succeeded", "partially_failed", "failed"],
    duration_seconds: float,
) -> None:
    """Capture the outcome of one Monica import run."""

    _monica_runs_counter.labels(status=status).inc()
    _monica_run_duration.observe(duration_seconds)


def record_monica_rows(counts: Mapping[str, int], *, errors: int = 0, skipped: Mapping[str, int] | None = None) -> None:
    """Increment row counters from an import summary."""

    for entity, count in counts.items():
        if count:
            _monica_rows_counter.labels(entity=entity).inc(count)
    if errors:
        _monica_row_errors_counter.inc(errors)
    for entity, count in (skipped or {}).items():
        if count:
            _monica_skipped_counter.labels(entity=entity).inc(count)
