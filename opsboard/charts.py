from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

STATUS_COLORS = {
    "on_track": "#16a34a",
    "needs_attention": "#f59e0b",
    "at_risk": "#dc2626",
}


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def status_indicator_chart(indicators: Dict[str, int]) -> Dict[str, Any]:
    df = pd.DataFrame(
        [{"status": status, "projects": int(indicators.get(status, 0))} for status in STATUS_COLORS]
    )
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("status:N", sort=list(STATUS_COLORS), title=None),
            y=alt.Y("projects:Q", title="Projects"),
            color=alt.Color(
                "status:N",
                scale=alt.Scale(domain=list(STATUS_COLORS), range=list(STATUS_COLORS.values())),
                legend=None,
            ),
            tooltip=["status:N", "projects:Q"],
        )
        .properties(title="Project status")
    )
    return to_vega_spec(chart)
