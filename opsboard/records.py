from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

import pandas as pd

from opsboard.errors import MappingFailure
from opsboard.progress import estimate_progress, parse_timestamp
from opsboard.status import CanonicalStatus, map_activity_status, map_project_status
from opsboard.timefmt import UNKNOWN_TIME, time_ago

Trend = Literal["up", "down", "neutral"]
TRENDS = ("up", "down", "neutral")


@dataclass(frozen=True)
class ActivityRecord:
    project: str
    activity: str
    status: CanonicalStatus
    time: str
    performed_by: str


@dataclass(frozen=True)
class ProjectRecord:
    name: str
    status: CanonicalStatus
    progress: float
    due_date: str
    address: str
    assigned: str


@dataclass(frozen=True)
class MetricRecord:
    name: str
    value: float
    type: str = "number"
    unit: str = ""
    trend: Trend = "neutral"
    change: float = 0.0
    category: str = "general"


def _require_mapping(row: Any) -> Mapping[str, Any]:
    if not isinstance(row, Mapping):
        raise MappingFailure(f"expected a mapping row, got {type(row).__name__}")
    return row


def _text(row: Mapping[str, Any], key: str, default: str) -> str:
    value = row.get(key)
    if value is None:
        return default
    return str(value)


def _number(row: Mapping[str, Any], key: str) -> float:
    value = row.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise MappingFailure(f"{key}: not a number: {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise MappingFailure(f"{key}: not a number: {value!r}") from exc
    if not math.isfinite(out):
        raise MappingFailure(f"{key}: not a number: {value!r}")
    return out


def activity_from_row(row: Any, now: pd.Timestamp) -> ActivityRecord:
    """Build an ActivityRecord from a `recent_activity` row."""
    row = _require_mapping(row)
    activity_time = parse_timestamp(row.get("activity_time"))
    label = time_ago(activity_time, now) if activity_time is not None else UNKNOWN_TIME
    activity_type = row.get("activity_type")
    return ActivityRecord(
        project=_text(row, "deal_id", "Unknown Project"),
        activity=f"{_text(row, 'activity_type', 'Activity')}: {_text(row, 'reference', 'No reference')}",
        status=map_activity_status(activity_type),
        time=label,
        performed_by=_text(row, "performed_by", "System"),
    )


def project_from_row(row: Any, now: pd.Timestamp) -> ProjectRecord:
    """Build a ProjectRecord from a `deals` row."""
    row = _require_mapping(row)
    return ProjectRecord(
        name=_text(row, "deal", "Unknown Project"),
        status=map_project_status(row.get("project_status")),
        progress=estimate_progress(row.get("start_date"), row.get("end_date"), now),
        due_date=_text(row, "end_date", ""),
        address=_text(row, "address", ""),
        assigned=_text(row, "assigned", "Unassigned"),
    )


def _trend(raw: Optional[object]) -> Trend:
    if isinstance(raw, str) and raw.lower() in TRENDS:
        return raw.lower()  # type: ignore[return-value]
    return "neutral"


def metric_from_row(row: Any) -> MetricRecord:
    """Build a MetricRecord from a `dashboard_metrics_view` row."""
    row = _require_mapping(row)
    return MetricRecord(
        name=_text(row, "metric_name", "Unknown Metric"),
        value=_number(row, "metric_value"),
        type=_text(row, "metric_type", "number"),
        unit=_text(row, "unit", ""),
        trend=_trend(row.get("trend_direction")),
        change=_number(row, "change_percentage"),
        category=_text(row, "category", "general"),
    )
