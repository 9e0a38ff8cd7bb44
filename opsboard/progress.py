from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

import pandas as pd

TimestampLike = Union[str, datetime, pd.Timestamp, None]

ONE_DAY = pd.Timedelta(days=1)


def parse_timestamp(value: object) -> Optional[pd.Timestamp]:
    """Parse an ISO-8601 string or datetime into a UTC Timestamp.

    Naive values are taken to be UTC. Returns None for blanks and anything
    pandas cannot parse.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce", utc=True)
    except (TypeError, ValueError):
        return None
    if ts is None or pd.isna(ts) or not isinstance(ts, pd.Timestamp):
        return None
    return ts


def whole_days(later: pd.Timestamp, earlier: pd.Timestamp) -> int:
    return int((later - earlier) / ONE_DAY)


def estimate_progress(start_date: TimestampLike, end_date: TimestampLike, now: TimestampLike) -> float:
    """Fraction of the start..end window that has elapsed at `now`.

    A zero-day window (start and end on the same day) counts as finished once
    `now` is inside it.
    """
    start = parse_timestamp(start_date)
    end = parse_timestamp(end_date)
    current = parse_timestamp(now)
    if start is None or end is None or current is None:
        return 0.0
    if current < start:
        return 0.0
    if current > end:
        return 1.0

    total_days = whole_days(end, start)
    if total_days <= 0:
        return 1.0
    elapsed_days = whole_days(current, start)
    return min(1.0, max(0.0, elapsed_days / total_days))
