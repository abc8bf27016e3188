from __future__ import annotations

"""Prometheus metrics for the schema registry client."""

from schemacache.foundation.common.metrics_factory import (
    get_or_create_counter,
    reset_metrics as reset_registered_metrics,
)

_REGISTERED_METRICS: set[str] = set()


def _counter(name: str, documentation: str, labelnames: tuple[str, ...]):
    metric = get_or_create_counter(name, documentation, labelnames)
    _REGISTERED_METRICS.add(name)
    return metric


cache_lookups_total = _counter(
    "schema_cache_lookups_total",
    "Schema cache lookups by index and result",
    ("index", "result"),
)

registry_requests_total = _counter(
    "schema_registry_requests_total",
    "Requests sent to the schema registry service",
    ("operation", "outcome"),
)

validation_failures_total = _counter(
    "schema_validation_failures_total",
    "Requests rejected locally before reaching the cache",
    ("field",),
)


def record_cache_lookup(index: str, hit: bool) -> None:
    cache_lookups_total.labels(index=index, result="hit" if hit else "miss").inc()


def record_request(operation: str, ok: bool) -> None:
    registry_requests_total.labels(
        operation=operation, outcome="success" if ok else "error"
    ).inc()


def record_validation_failure(field: str) -> None:
    validation_failures_total.labels(field=field).inc()


def reset_metrics() -> None:
    """Reset all schema client metrics."""

    reset_registered_metrics(_REGISTERED_METRICS)


__all__ = [
    "cache_lookups_total",
    "record_cache_lookup",
    "record_request",
    "record_validation_failure",
    "registry_requests_total",
    "reset_metrics",
    "validation_failures_total",
]
