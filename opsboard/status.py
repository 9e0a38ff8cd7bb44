from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple

CanonicalStatus = Literal["on_track", "in_progress", "needs_attention", "at_risk", "completed"]

ON_TRACK: CanonicalStatus = "on_track"
IN_PROGRESS: CanonicalStatus = "in_progress"
NEEDS_ATTENTION: CanonicalStatus = "needs_attention"
AT_RISK: CanonicalStatus = "at_risk"
COMPLETED: CanonicalStatus = "completed"

CANONICAL_STATUSES: Tuple[CanonicalStatus, ...] = (ON_TRACK, IN_PROGRESS, NEEDS_ATTENTION, AT_RISK, COMPLETED)

ACTIVITY_STATUS_MAP: Dict[str, CanonicalStatus] = {
    "completion": COMPLETED,
    "completed": COMPLETED,
    "start": IN_PROGRESS,
    "started": IN_PROGRESS,
    "issue": AT_RISK,
    "problem": AT_RISK,
    "attention": NEEDS_ATTENTION,
    "review": NEEDS_ATTENTION,
}

PROJECT_STATUS_MAP: Dict[str, CanonicalStatus] = {
    "active": IN_PROGRESS,
    "in_progress": IN_PROGRESS,
    "on_track": ON_TRACK,
    "attention": NEEDS_ATTENTION,
    "needs_attention": NEEDS_ATTENTION,
    "at_risk": AT_RISK,
    "delayed": AT_RISK,
}


def _lookup(mapping: Dict[str, CanonicalStatus], raw: object) -> CanonicalStatus:
    if not isinstance(raw, str):
        return ON_TRACK
    return mapping.get(raw.lower(), ON_TRACK)


def map_activity_status(activity_type: Optional[str]) -> CanonicalStatus:
    """Map a raw activity type (e.g. "Completion", "issue") to a canonical status."""
    return _lookup(ACTIVITY_STATUS_MAP, activity_type)


def map_project_status(project_status: Optional[str]) -> CanonicalStatus:
    """Map a raw deal project_status (e.g. "active", "delayed") to a canonical status."""
    return _lookup(PROJECT_STATUS_MAP, project_status)
