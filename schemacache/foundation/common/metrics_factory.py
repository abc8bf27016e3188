from __future__ import annotations

"""Idempotent Prometheus counter registration.

Modules declare their counters at import time. Re-importing a module (or
declaring the same counter from two call sites) must hand back the collector
that is already registered instead of tripping Prometheus' duplicate-name
check, and tests need a way to zero every counter a module owns.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Dict, Tuple

from prometheus_client import CollectorRegistry, Counter, REGISTRY as global_registry

__all__ = [
    "get_or_create_counter",
    "get_metric_value",
    "reset_metrics",
]

RegistryKey = Tuple[CollectorRegistry, str]

_METRIC_CACHE: Dict[RegistryKey, Counter] = {}
_RESET_CALLBACKS: Dict[RegistryKey, Callable[[], None]] = {}


def get_or_create_counter(
    name: str,
    documentation: str,
    labelnames: Sequence[str] | None = None,
    *,
    registry: CollectorRegistry | None = None,
) -> Counter:
    """Return an existing counter or register a new one."""

    reg = registry or global_registry
    labels = tuple(labelnames or ())
    cache_key = (reg, name)
    cached = _METRIC_CACHE.get(cache_key)
    if cached is not None and _labels_match(cached, labels):
        return cached
    if cached is not None:
        reg.unregister(cached)
        _METRIC_CACHE.pop(cache_key, None)

    existing = _lookup_metric(reg, name)
    if existing is not None and not isinstance(existing, Counter):
        raise TypeError(
            f"Metric '{name}' already registered with incompatible type {type(existing)!r}"
        )
    if existing is not None and not _labels_match(existing, labels):
        reg.unregister(existing)
        existing = None
    metric = existing if existing is not None else Counter(name, documentation, labels, registry=reg)
    _METRIC_CACHE[cache_key] = metric
    _RESET_CALLBACKS[cache_key] = lambda: _reset_counter(metric)
    return metric


def reset_metrics(
    names: Iterable[str] | None = None,
    *,
    registry: CollectorRegistry | None = None,
) -> None:
    """Zero the counters registered through this module.

    When ``names`` is ``None`` every counter known for ``registry`` is reset.
    """

    reg = registry or global_registry
    requested = None if names is None else set(names)
    for key, callback in list(_RESET_CALLBACKS.items()):
        if key[0] is not reg:
            continue
        if requested is not None and key[1] not in requested:
            continue
        callback()


def get_metric_value(metric: Counter, labels: Mapping[str, str] | None = None) -> float:
    """Return the current ``_total`` sample of ``metric``.

    With ``labels`` the matching labelled sample is returned; a label set that
    was never incremented reads as ``0.0``.
    """

    wanted = dict(labels) if labels is not None else None
    for family in metric.collect():
        for sample in family.samples:
            if not sample.name.endswith("_total"):
                continue
            if wanted is None and sample.labels:
                continue
            if wanted is not None and sample.labels != wanted:
                continue
            return float(sample.value)
    return 0.0


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reset_counter(metric: Counter) -> None:
    if getattr(metric, "_labelnames", ()):
        metric.clear()
        return
    metric._value.set(0)  # type: ignore[attr-defined]


def _lookup_metric(registry: CollectorRegistry, name: str):
    collectors = getattr(registry, "_names_to_collectors", None)
    if collectors is None:  # pragma: no cover - prometheus internals changed
        return None
    return collectors.get(name) or collectors.get(f"{name}_total")


def _labels_match(metric: Counter, expected: Sequence[str]) -> bool:
    return tuple(getattr(metric, "_labelnames", ())) == tuple(expected)
