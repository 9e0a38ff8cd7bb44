from __future__ import annotations

from datetime import datetime
from typing import Union

import pandas as pd

UNKNOWN_TIME = "Unknown time"


def time_ago(past: Union[datetime, pd.Timestamp], now: Union[datetime, pd.Timestamp]) -> str:
    """Relative label such as "5 min ago"; both instants must share tz-awareness."""
    seconds = (pd.Timestamp(now) - pd.Timestamp(past)).total_seconds()
    minutes = int(seconds / 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} min ago"
    hours = int(seconds / 3600)
    if hours < 24:
        return f"{hours} hr ago"
    days = int(seconds / 86400)
    return f"{days} days ago"


def format_clock(now: Union[datetime, pd.Timestamp]) -> str:
    return pd.Timestamp(now).strftime("%H:%M:%S")
