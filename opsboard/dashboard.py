from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, Tuple, Union

from opsboard.loader import DATASETS, DashboardState, DataLoader
from opsboard.metrics import get_metric
from opsboard.records import ActivityRecord, MetricRecord, ProjectRecord
from opsboard.status import AT_RISK, COMPLETED, IN_PROGRESS, NEEDS_ATTENTION, ON_TRACK
from opsboard.timefmt import format_clock

INDICATOR_STATUSES = (ON_TRACK, NEEDS_ATTENTION, AT_RISK)

EMPTY_PACING: Dict[str, Any] = {
    "units_completed": 0,
    "units_completed_change": 0,
    "scheduled_today": 0,
    "scheduled_today_change": 0,
    "completion_rate": 0.0,
    "completion_rate_change": 0,
}


def _count_status(records: Iterable[Any], status: str) -> int:
    return sum(1 for r in records if r.status == status)


class DashboardAggregator:
    """Read views over a loader's `DashboardState`; computed on every call."""

    def __init__(self, source: Union[DataLoader, DashboardState]):
        self._state = source.state if isinstance(source, DataLoader) else source

    @property
    def state(self) -> DashboardState:
        return self._state

    def get_recent_activities(self) -> Tuple[ActivityRecord, ...]:
        return self._state.recent_activities

    def get_active_projects(self) -> Tuple[ProjectRecord, ...]:
        return self._state.active_projects

    def get_dashboard_metrics(self) -> Tuple[MetricRecord, ...]:
        return self._state.dashboard_metrics

    def get_status_indicators(self) -> Dict[str, int]:
        projects = self._state.projects
        if projects.loading:
            return {status: 0 for status in INDICATOR_STATUSES}
        return {status: _count_status(projects.records, status) for status in INDICATOR_STATUSES}

    def get_pacing_metrics(self) -> Dict[str, Any]:
        metrics = self._state.metrics
        if metrics.loading:
            return dict(EMPTY_PACING)

        units_completed = get_metric(metrics.records, "units_completed")
        scheduled_today = get_metric(metrics.records, "scheduled_today")
        completion_rate = get_metric(metrics.records, "completion_rate")
        return {
            "units_completed": int(units_completed.value),
            "units_completed_change": int(units_completed.change),
            "scheduled_today": int(scheduled_today.value),
            "scheduled_today_change": int(scheduled_today.change),
            "completion_rate": float(completion_rate.value),
            "completion_rate_change": int(completion_rate.change),
        }

    def get_header_stats(self) -> Dict[str, int]:
        # Not gated on loading flags: counts whatever is currently cached.
        projects = self._state.active_projects
        activities = self._state.recent_activities
        return {
            "total_projects": len(projects),
            "active_projects": _count_status(projects, IN_PROGRESS),
            "completed_today": _count_status(activities, COMPLETED),
            "alerts": _count_status(projects, AT_RISK),
        }

    def get_load_status(self) -> Dict[str, Dict[str, Any]]:
        status: Dict[str, Dict[str, Any]] = {}
        for name in DATASETS:
            dataset = getattr(self._state, name)
            status[name] = {
                "loading": dataset.loading,
                "rows": len(dataset.records),
                "last_error": dataset.last_error,
                "loaded_at": dataset.loaded_at.isoformat() if dataset.loaded_at is not None else None,
            }
        return status

    def snapshot(self) -> Dict[str, Any]:
        """Every view in one JSON-serializable payload."""
        last_update = self._state.last_update
        return {
            "last_update": last_update.isoformat() if last_update is not None else None,
            "clock": format_clock(last_update) if last_update is not None else None,
            "header": self.get_header_stats(),
            "status_indicators": self.get_status_indicators(),
            "pacing": self.get_pacing_metrics(),
            "recent_activities": [asdict(a) for a in self.get_recent_activities()],
            "active_projects": [asdict(p) for p in self.get_active_projects()],
            "load_status": self.get_load_status(),
        }
