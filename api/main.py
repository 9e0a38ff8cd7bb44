from __future__ import annotations

import asyncio
import logging
import math
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Callable, Dict, List

from fastapi import Depends, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    ActivityModel,
    DatasetStatusModel,
    HeaderStatsModel,
    MetricModel,
    PacingMetricsModel,
    ProjectModel,
    SnapshotModel,
    StatusIndicatorsModel,
)
from opsboard.charts import status_indicator_chart
from opsboard.config import load_settings
from opsboard.dashboard import DashboardAggregator
from opsboard.loader import DataLoader
from opsboard.store import SupabaseStore

logger = logging.getLogger(__name__)
settings = load_settings()


@lru_cache(maxsize=1)
def get_loader() -> DataLoader:
    return DataLoader(SupabaseStore.from_settings(settings), settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    loader = get_loader()
    # Initial load runs in the background; views report loading until it lands.
    task = asyncio.create_task(loader.load_all_data())
    yield
    if not task.done():
        await task


app = FastAPI(title="Operations Dashboard API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_aggregator(loader: DataLoader = Depends(get_loader)) -> DashboardAggregator:
    return DashboardAggregator(loader)


def _json(data: object) -> JSONResponse:
    """Return JSON for dataclass/tuple payloads with non-finite floats as null."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(content=jsonable_encoder(data, custom_encoder={float: _safe_float}))


def _error(name: str, exc: Exception) -> JSONResponse:
    logger.exception("%s failed", name)
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _view(name: str, compute: Callable[[], object]) -> JSONResponse:
    try:
        return _json(compute())
    except Exception as exc:
        return _error(name, exc)


@app.get("/activities", response_model=List[ActivityModel])
def activities(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("activities", agg.get_recent_activities)


@app.get("/projects", response_model=List[ProjectModel])
def projects(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("projects", agg.get_active_projects)


@app.get("/metrics", response_model=List[MetricModel])
def metrics(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("metrics", agg.get_dashboard_metrics)


@app.get("/status-indicators", response_model=StatusIndicatorsModel)
def status_indicators(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("status_indicators", agg.get_status_indicators)


@app.get("/pacing", response_model=PacingMetricsModel)
def pacing(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("pacing", agg.get_pacing_metrics)


@app.get("/header", response_model=HeaderStatsModel)
def header(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("header", agg.get_header_stats)


@app.get("/snapshot", response_model=SnapshotModel)
def snapshot(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("snapshot", agg.snapshot)


@app.get("/charts/status")
def status_chart(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("status_chart", lambda: status_indicator_chart(agg.get_status_indicators()))


@app.get("/debug", response_model=Dict[str, DatasetStatusModel])
def debug(agg: DashboardAggregator = Depends(get_aggregator)):
    return _view("debug", agg.get_load_status)


@app.post("/refresh", response_model=SnapshotModel)
async def refresh(loader: DataLoader = Depends(get_loader)):
    try:
        await loader.update_data()
        return _json(DashboardAggregator(loader).snapshot())
    except Exception as exc:
        return _error("refresh", exc)
