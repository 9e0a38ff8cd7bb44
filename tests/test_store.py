from types import SimpleNamespace

import pytest

from opsboard.errors import QueryFailure
from opsboard.loader import metric_query, project_query
from opsboard.store import QuerySpec, SupabaseStore


class FakeRequest:
    def __init__(self, log, data):
        self.log = log
        self.data = data

    def __getattr__(self, name):
        def call(*args, **kwargs):
            self.log.append((name, args, kwargs))
            return self

        return call

    def execute(self):
        if isinstance(self.data, Exception):
            raise self.data
        return SimpleNamespace(data=self.data)


class FakeClient:
    def __init__(self, data):
        self.log = []
        self.data = data

    def table(self, name):
        self.log.append(("table", (name,), {}))
        return FakeRequest(self.log, self.data)


def test_builds_postgrest_chain():
    client = FakeClient([{"deal": "A"}])
    rows = SupabaseStore(client).query(project_query(10))
    assert rows == [{"deal": "A"}]
    assert client.log == [
        ("table", ("deals",), {}),
        ("select", ("*",), {}),
        ("neq", ("project_status", "completed"), {}),
        ("order", ("start_date",), {"desc": True}),
        ("limit", (10,), {}),
    ]


def test_no_limit_means_no_limit_call():
    client = FakeClient([])
    SupabaseStore(client).query(metric_query())
    assert [entry[0] for entry in client.log] == ["table", "select", "order"]
    assert client.log[-1][2] == {"desc": False}


@pytest.mark.parametrize("data", [None, {"deal": "A"}, RuntimeError("timeout")])
def test_bad_responses_raise_query_failure(data):
    with pytest.raises(QueryFailure) as info:
        SupabaseStore(FakeClient(data)).query(QuerySpec(table="deals"))
    assert info.value.table == "deals"


def test_unsupported_filter_op():
    spec = QuerySpec(table="deals", filters=(("deal", "like", "A%"),))
    with pytest.raises(QueryFailure, match="unsupported filter op"):
        SupabaseStore(FakeClient([])).query(spec)


@pytest.mark.parametrize("op", ["eq", "gt", "gte", "lt", "lte"])
def test_comparison_filters_pass_through(op):
    client = FakeClient([])
    spec = QuerySpec(table="recent_activity", filters=(("activity_time", op, "2024-01-01"),))
    SupabaseStore(client).query(spec)
    assert client.log[2] == (op, ("activity_time", "2024-01-01"), {})
