"""
Loads the three dashboard datasets from the remote store.

Each dataset (activities, projects, metrics) is fetched independently and
lands in a `DatasetState` that is swapped in whole, so readers only ever see
one fetch's complete output. A failed fetch keeps the previous records, clears
the loading flag and records the error; nothing is raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

import pandas as pd

from opsboard.config import Settings
from opsboard.errors import DashboardError, QueryFailure
from opsboard.records import (
    ActivityRecord,
    MetricRecord,
    ProjectRecord,
    activity_from_row,
    metric_from_row,
    project_from_row,
)
from opsboard.store import QuerySpec, QueryStore

logger = logging.getLogger(__name__)

ACTIVITIES = "activities"
PROJECTS = "projects"
METRICS = "metrics"
DATASETS = (ACTIVITIES, PROJECTS, METRICS)

RowBuilder = Callable[[Any, pd.Timestamp], Any]
Clock = Callable[[], pd.Timestamp]


def utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


def activity_query(limit: int = 20) -> QuerySpec:
    return QuerySpec(table="recent_activity", order_by="activity_time", descending=True, limit=limit)


def project_query(limit: int = 10) -> QuerySpec:
    return QuerySpec(
        table="deals",
        filters=(("project_status", "neq", "completed"),),
        order_by="start_date",
        descending=True,
        limit=limit,
    )


def metric_query() -> QuerySpec:
    return QuerySpec(table="dashboard_metrics_view", order_by="metric_name")


@dataclass(frozen=True)
class FetchResult:
    records: Tuple[Any, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DatasetState:
    records: Tuple[Any, ...] = ()
    loading: bool = True
    last_error: Optional[str] = None
    loaded_at: Optional[pd.Timestamp] = None

    def applied(self, result: FetchResult, now: pd.Timestamp) -> "DatasetState":
        if result.ok:
            return DatasetState(records=result.records, loading=False, last_error=None, loaded_at=now)
        return replace(self, loading=False, last_error=result.error)


@dataclass
class DashboardState:
    activities: DatasetState = field(default_factory=DatasetState)
    projects: DatasetState = field(default_factory=DatasetState)
    metrics: DatasetState = field(default_factory=DatasetState)
    last_update: Optional[pd.Timestamp] = None

    @property
    def recent_activities(self) -> Tuple[ActivityRecord, ...]:
        return self.activities.records

    @property
    def active_projects(self) -> Tuple[ProjectRecord, ...]:
        return self.projects.records

    @property
    def dashboard_metrics(self) -> Tuple[MetricRecord, ...]:
        return self.metrics.records


class DataLoader:
    def __init__(self, store: QueryStore, settings: Optional[Settings] = None, clock: Clock = utc_now):
        settings = settings or Settings()
        self.store = store
        self.clock = clock
        self.state = DashboardState()
        self.queries: Dict[str, QuerySpec] = {
            ACTIVITIES: activity_query(settings.activity_limit),
            PROJECTS: project_query(settings.project_limit),
            METRICS: metric_query(),
        }
        self._round_lock = asyncio.Lock()
        self._dataset_locks = {name: asyncio.Lock() for name in DATASETS}

    async def _fetch(self, spec: QuerySpec, build: RowBuilder) -> FetchResult:
        try:
            rows = await asyncio.to_thread(self.store.query, spec)
            if rows is None:
                raise QueryFailure(spec.table, "no rows returned")
            now = self.clock()
            records = tuple(build(row, now) for row in rows)
        except DashboardError as exc:
            logger.warning("Error loading %s: %s", spec.table, exc)
            return FetchResult(error=str(exc))
        except Exception as exc:
            logger.exception("Error loading %s", spec.table)
            return FetchResult(error=f"{type(exc).__name__}: {exc}")
        logger.info("Loaded %d rows from %s", len(records), spec.table)
        return FetchResult(records=records)

    async def _load(self, name: str, build: RowBuilder) -> FetchResult:
        async with self._dataset_locks[name]:
            setattr(self.state, name, replace(getattr(self.state, name), loading=True))
            result = await self._fetch(self.queries[name], build)
            setattr(self.state, name, getattr(self.state, name).applied(result, self.clock()))
            return result

    async def load_recent_activities(self) -> FetchResult:
        return await self._load(ACTIVITIES, activity_from_row)

    async def load_active_projects(self) -> FetchResult:
        return await self._load(PROJECTS, project_from_row)

    async def load_dashboard_metrics(self) -> FetchResult:
        return await self._load(METRICS, lambda row, _now: metric_from_row(row))

    @property
    def is_reloading(self) -> bool:
        return self._round_lock.locked()

    async def load_all_data(self) -> Dict[str, FetchResult]:
        """Fetch all three datasets concurrently; waits out any reload already in flight."""
        if self._round_lock.locked():
            logger.info("Reload already in flight; waiting for it to finish")
        async with self._round_lock:
            results = await asyncio.gather(
                self.load_recent_activities(),
                self.load_active_projects(),
                self.load_dashboard_metrics(),
            )
        return dict(zip(DATASETS, results))

    async def update_data(self) -> Dict[str, FetchResult]:
        self.state.last_update = self.clock()
        return await self.load_all_data()
