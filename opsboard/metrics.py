from __future__ import annotations

from typing import Iterable, NamedTuple

from opsboard.records import MetricRecord


class MetricValue(NamedTuple):
    value: float
    change: float


MISSING_METRIC = MetricValue(0.0, 0.0)


def _normalize_name(name: str) -> str:
    # "units_completed" should find "Units Completed This Week"
    return name.lower().replace("_", " ")


def get_metric(metrics: Iterable[MetricRecord], name_pattern: str) -> MetricValue:
    """First metric whose name contains `name_pattern` (case-insensitive), else zeros.

    Order is the caller's; the loader keeps metrics sorted by name so the
    alphabetically first match wins when several names overlap.
    """
    needle = _normalize_name(name_pattern)
    for metric in metrics:
        if needle in _normalize_name(metric.name):
            return MetricValue(float(metric.value), float(metric.change))
    return MISSING_METRIC
