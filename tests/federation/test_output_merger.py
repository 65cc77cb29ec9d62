# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for fedgraph.federation.merger - FederatedOutputMerger."""

from __future__ import annotations

import anyio
import pytest

from fedgraph.errors import BackendExecutionError, GraphLookupError, RequestCancelledError
from fedgraph.federation import (
    OPT_AGGREGATE_ELEMENTS,
    OPT_GRAPH_IDS,
    FederatedOutputMerger,
    OutputMerger,
    distinct_elements,
)
from fedgraph.operations import Operation, OperationKind, RequestContext


def _get(**options: str) -> Operation:
    return Operation(operation_type="get_elements", kind=OperationKind.OUTPUT, options=options)


class SlowGraph:
    """Returns its result after a delay, to scramble completion order."""

    def __init__(self, delay: float, result):
        self.delay = delay
        self.result = result

    async def execute(self, operation, user):
        await anyio.sleep(self.delay)
        return self.result


class TestDistinctElements:
    def test_keeps_first_occurrence(self):
        assert distinct_elements([3, 1, 3, 2, 1]) == [3, 1, 2]

    def test_unhashable_elements(self):
        assert distinct_elements([{"a": 1}, {"a": 1}, {"b": 2}]) == [{"a": 1}, {"b": 2}]


class TestFederatedOutputMerger:
    def test_satisfies_protocol(self):
        assert isinstance(FederatedOutputMerger(), OutputMerger)

    @pytest.mark.anyio
    async def test_concatenates_in_graph_id_order(self, make_registry, call_log):
        registry = make_registry(
            ["b", "a"], results={"a": [1, 2], "b": [2, 3]}
        )

        result = await FederatedOutputMerger().execute(_get(), RequestContext(user="u"), registry)

        assert result == [1, 2, 2, 3]
        assert sorted(call_log) == [("a", "get_elements", "u"), ("b", "get_elements", "u")]

    @pytest.mark.anyio
    async def test_order_independent_of_completion(self, make_registry):
        """Slow graphs still contribute in sorted id order."""
        registry = make_registry([], defaults=["a", "b"])
        registry.register("a", SlowGraph(0.05, ["from-a"]))
        registry.register("b", SlowGraph(0.0, ["from-b"]))

        result = await FederatedOutputMerger().execute(_get(), RequestContext(), registry)

        assert result == ["from-a", "from-b"]

    @pytest.mark.anyio
    async def test_aggregate_option(self, make_registry):
        registry = make_registry(["a", "b"], results={"a": [1, 2], "b": [2, 3]})
        op = _get().with_option(OPT_AGGREGATE_ELEMENTS, "True")

        assert await FederatedOutputMerger().execute(op, RequestContext(), registry) == [1, 2, 3]

    @pytest.mark.anyio
    async def test_custom_aggregator(self, make_registry):
        registry = make_registry(["a", "b"], results={"a": [1, 2], "b": [3]})
        op = _get().with_option(OPT_AGGREGATE_ELEMENTS, "true")
        merger = FederatedOutputMerger(aggregator=sum)

        assert await merger.execute(op, RequestContext(), registry) == 6

    @pytest.mark.anyio
    async def test_scalar_and_none_results(self, make_registry):
        """Scalars count as one element each; None contributes nothing."""
        registry = make_registry(
            ["a", "b", "c"], results={"a": 5, "b": None, "c": "text"}
        )

        assert await FederatedOutputMerger().execute(_get(), RequestContext(), registry) == [5, "text"]

    @pytest.mark.anyio
    async def test_no_targets_returns_empty(self, make_registry):
        registry = make_registry(["a"], defaults=[])
        assert await FederatedOutputMerger().execute(_get(), RequestContext(), registry) == []

    @pytest.mark.anyio
    async def test_uses_graph_ids_option(self, make_registry, call_log):
        registry = make_registry(["a", "b", "c"], results={"a": [1], "c": [3]})
        op = _get(**{OPT_GRAPH_IDS: "c,a"})

        assert await FederatedOutputMerger().execute(op, RequestContext(), registry) == [1, 3]
        assert {entry[0] for entry in call_log} == {"a", "c"}

    @pytest.mark.anyio
    async def test_unknown_graph_raises(self, make_registry):
        registry = make_registry(["a"])

        with pytest.raises(GraphLookupError):
            await FederatedOutputMerger().execute(
                _get(**{OPT_GRAPH_IDS: "nope"}), RequestContext(), registry
            )

    @pytest.mark.anyio
    async def test_failure_fails_request_by_default(self, make_registry):
        boom = ValueError("bad query")
        registry = make_registry(["a", "b"], results={"a": [1]}, errors={"b": boom})

        with pytest.raises(BackendExecutionError) as exc_info:
            await FederatedOutputMerger().execute(_get(), RequestContext(), registry)

        assert exc_info.value.graph_id == "b"
        assert exc_info.value.__cause__ is boom

    @pytest.mark.anyio
    async def test_skip_failed_graphs(self, make_registry, caplog):
        registry = make_registry(
            ["a", "b", "c"],
            results={"a": [1], "c": [3]},
            errors={"b": ValueError("bad query")},
        )
        merger = FederatedOutputMerger(skip_failed_graphs=True)

        with caplog.at_level("ERROR", logger="fedgraph.federation.merger"):
            result = await merger.execute(_get(), RequestContext(), registry)

        assert result == [1, 3]
        assert "Graph 'b' failed" in caplog.text

    @pytest.mark.anyio
    async def test_cancelled_request(self, make_registry, call_log):
        registry = make_registry(["a", "b"])
        ctx = RequestContext()
        ctx.cancel()

        with pytest.raises(RequestCancelledError):
            await FederatedOutputMerger().execute(_get(), ctx, registry)

        assert call_log == []

    @pytest.mark.anyio
    async def test_cancel_lets_issued_calls_finish(self, make_registry):
        """Graphs already queried complete; graphs still waiting are skipped."""
        events: list[str] = []
        ctx = RequestContext()

        class SlowRecordingGraph:
            async def execute(self, operation, user):
                events.append("a-start")
                await anyio.sleep(0.05)
                events.append("a-done")
                return ["from-a"]

        class CancellingGraph:
            async def execute(self, operation, user):
                events.append("b-start")
                ctx.cancel()
                return ["from-b"]

        class NeverQueriedGraph:
            async def execute(self, operation, user):
                events.append("c-start")
                return ["from-c"]

        registry = make_registry([], defaults=["a", "b", "c"])
        registry.register("a", SlowRecordingGraph())
        registry.register("b", CancellingGraph())
        registry.register("c", NeverQueriedGraph())

        with pytest.raises(RequestCancelledError) as exc_info:
            await FederatedOutputMerger(max_concurrent=2).execute(_get(), ctx, registry)

        assert exc_info.value.details == {"graph_id": "c"}
        assert "a-done" in events
        assert "c-start" not in events

    @pytest.mark.anyio
    async def test_max_concurrent_bound(self, make_registry):
        """No more than max_concurrent graphs run at once."""
        running = 0
        peak = 0

        class CountingGraph:
            async def execute(self, operation, user):
                nonlocal running, peak
                running += 1
                peak = max(peak, running)
                await anyio.sleep(0.01)
                running -= 1
                return []

        ids = [f"g{i}" for i in range(6)]
        registry = make_registry([], defaults=ids)
        for graph_id in ids:
            registry.register(graph_id, CountingGraph())

        await FederatedOutputMerger(max_concurrent=2).execute(_get(), RequestContext(), registry)

        assert peak == 2
