"""
Datastar Adapter Tests

Signal naming, payload shape, and the SSE stream for a single query.
"""

import json

import pytest

from starquery import Query, QueryConfig
from starquery.adapters import SSE_HEADERS, merge_query_signals, stream_query
from starquery.core.signals import merge_signals, signal_name


def _payload(event: str) -> dict:
    """Pull the JSON signals out of a merge-signals event"""
    return json.loads(event[event.index("{"):event.rindex("}") + 1])


class TestSignals:

    def test_signal_names(self):
        assert signal_name("is_loading", "users") == "$users.isLoading"
        assert signal_name("is_loading", "users", use_namespace=False) == "$isLoading"
        assert signal_name("value") == "$value"

    def test_query_signals_before_fetch(self, recorder):
        query = Query(0, recorder(result=1), name="count")

        assert query.signals() == {
            "count": {
                "value": 0,
                "isLoading": True,
                "isFetched": False,
                "error": None,
                "phase": "not_fetched",
            }
        }

    @pytest.mark.asyncio
    async def test_query_signals_after_failure(self, recorder):
        query = Query("", recorder(error=RuntimeError("network down")), name="feed")
        await query.ensure_loaded()

        signals = query.signals()["feed"]

        assert signals["error"] == "network down"
        assert signals["phase"] == "errored"
        assert signals["isLoading"] is False

    def test_flat_signals(self, recorder):
        query = Query(0, recorder(result=1), config=QueryConfig(use_namespace=False))

        assert set(query.signals()) == {"value", "isLoading", "isFetched", "error", "phase"}

    def test_merge_signals_combines_namespaces(self):
        merged = merge_signals({"a": {"x": 1}}, {"a": {"y": 2}}, {"b": 3})
        assert merged == {"a": {"x": 1, "y": 2}, "b": 3}


class TestDatastarStream:

    def test_merge_query_signals_event(self, recorder):
        users = Query([], recorder(result=["ann"]), name="users")
        count = Query(0, recorder(result=1), name="count")

        event = merge_query_signals(users, count)

        assert set(_payload(event)) == {"users", "count"}

    def test_sse_headers_exported(self):
        assert SSE_HEADERS["Content-Type"] == "text/event-stream"

    @pytest.mark.asyncio
    async def test_stream_starts_fetch_and_reports_result(self, recorder):
        fetch = recorder(result=["ann", "bob"])
        query = Query([], fetch, name="users")
        stream = stream_query(query, heartbeat=0.05)

        first = _payload(await stream.__anext__())["users"]
        assert first["isLoading"] is True

        payloads = []
        for _ in range(5):
            payloads.append(_payload(await stream.__anext__())["users"])
            if payloads[-1]["phase"] == "resolved":
                break

        assert payloads[-1]["value"] == ["ann", "bob"]
        assert payloads[-1]["isLoading"] is False
        assert fetch.call_count == 1

        await stream.aclose()
        assert query.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_stream_heartbeat_resends_signals(self, recorder):
        query = Query(0, recorder(result=3), name="count")
        await query.ensure_loaded()
        stream = stream_query(query, heartbeat=0.01)

        first = await stream.__anext__()
        second = await stream.__anext__()

        assert _payload(first) == _payload(second)
        assert _payload(second)["count"]["value"] == 3
        await stream.aclose()
