from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

StatusLiteral = Literal["on_track", "in_progress", "needs_attention", "at_risk", "completed"]


class ActivityModel(BaseModel):
    project: str
    activity: str
    status: StatusLiteral
    time: str
    performed_by: str


class ProjectModel(BaseModel):
    name: str
    status: StatusLiteral
    progress: float
    due_date: str
    address: str
    assigned: str


class MetricModel(BaseModel):
    name: str
    value: float
    type: str
    unit: str
    trend: Literal["up", "down", "neutral"]
    change: float
    category: str


class StatusIndicatorsModel(BaseModel):
    on_track: int = 0
    needs_attention: int = 0
    at_risk: int = 0


class PacingMetricsModel(BaseModel):
    units_completed: int = 0
    units_completed_change: int = 0
    scheduled_today: int = 0
    scheduled_today_change: int = 0
    completion_rate: float = 0.0
    completion_rate_change: int = 0


class HeaderStatsModel(BaseModel):
    total_projects: int = 0
    active_projects: int = 0
    completed_today: int = 0
    alerts: int = 0


class DatasetStatusModel(BaseModel):
    loading: bool
    rows: int
    last_error: Optional[str] = None
    loaded_at: Optional[str] = None


class SnapshotModel(BaseModel):
    last_update: Optional[str] = None
    clock: Optional[str] = None
    header: HeaderStatsModel
    status_indicators: StatusIndicatorsModel
    pacing: PacingMetricsModel
    recent_activities: List[ActivityModel]
    active_projects: List[ProjectModel]
    load_status: Dict[str, DatasetStatusModel]
