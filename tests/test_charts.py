from opsboard.charts import status_indicator_chart


def test_status_chart_spec_carries_counts():
    spec = status_indicator_chart({"on_track": 3, "needs_attention": 1, "at_risk": 2})
    values = next(iter(spec["datasets"].values()))
    assert {"status": "at_risk", "projects": 2} in values
    assert spec["encoding"]["y"]["field"] == "projects"
