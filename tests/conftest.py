from __future__ import annotations

import threading
import time
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import pytest

from opsboard.errors import QueryFailure
from opsboard.store import QuerySpec

NOW = pd.Timestamp("2024-01-06T12:00:00Z")


class InMemoryStore:
    """QueryStore over plain row lists; honours eq/neq filters, order and limit."""

    def __init__(self, tables: Optional[Dict[str, Iterable[Dict[str, Any]]]] = None, fail: Iterable[str] = (), delay: float = 0.0):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.fail = set(fail)
        self.delay = delay
        self.calls: List[QuerySpec] = []
        self._lock = threading.Lock()

    def query(self, spec: QuerySpec) -> List[Dict[str, Any]]:
        with self._lock:
            self.calls.append(spec)
        if self.delay:
            time.sleep(self.delay)
        if spec.table in self.fail:
            raise QueryFailure(spec.table, "connection refused")
        rows = [dict(r) for r in self.tables.get(spec.table, [])]
        for column, op, value in spec.filters:
            if op == "eq":
                rows = [r for r in rows if r.get(column) == value]
            elif op == "neq":
                rows = [r for r in rows if r.get(column) != value]
        if spec.order_by:
            rows.sort(key=lambda r: str(r.get(spec.order_by) or ""), reverse=spec.descending)
        if spec.limit is not None:
            rows = rows[: spec.limit]
        return rows


DEALS = [
    {"deal": "Harbor Lofts", "project_status": "active", "start_date": "2024-01-01", "end_date": "2024-01-11", "address": "1 Pier Rd", "assigned": "Dana"},
    {"deal": "Old Mill", "project_status": "completed", "start_date": "2023-12-01", "end_date": "2023-12-20"},
    {"deal": "Cedar Court", "project_status": "Delayed", "start_date": "2023-12-15", "end_date": "2024-02-15", "address": None, "assigned": None},
]

ACTIVITIES = [
    {"activity_time": "2024-01-06T11:55:00Z", "deal_id": "Harbor Lofts", "activity_type": "Completion", "reference": "Unit 4", "performed_by": "Dana"},
    {"activity_time": "2024-01-06T09:00:00Z", "deal_id": "Cedar Court", "activity_type": "issue", "reference": "Permit", "performed_by": None},
    {"activity_time": "not a date", "deal_id": None, "activity_type": None, "reference": None},
]

METRICS = [
    {"metric_name": "Completion Rate", "metric_value": 87.5, "metric_type": "percentage", "unit": "%", "trend_direction": "up", "change_percentage": 2.9, "category": "pacing"},
    {"metric_name": "Scheduled Today", "metric_value": 12, "change_percentage": -3.7},
    {"metric_name": "Units Completed This Week", "metric_value": 42, "change_percentage": 5},
]


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def store():
    return InMemoryStore({"deals": DEALS, "recent_activity": ACTIVITIES, "dashboard_metrics_view": METRICS})
