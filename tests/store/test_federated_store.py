# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for fedgraph.store - FederatedStore facade and built-in operations."""

from __future__ import annotations

import pytest

from fedgraph.errors import ChainPurityError, ExistsError, GraphLookupError
from fedgraph.federation import OPT_GRAPH_IDS, OPT_SHORT_GRAPH_IDS, FederatedStoreConfig
from fedgraph.operations import Operation, OperationChain, OperationKind, RequestContext
from fedgraph.store import (
    ADD_GRAPH,
    GET_ALL_GRAPH_IDS,
    REMOVE_GRAPH,
    FederatedStore,
    add_graph_operation,
    get_all_graph_ids_operation,
    remove_graph_operation,
)
from fedgraph.types import NoOp


@pytest.fixture
def store(make_graph):
    store = FederatedStore(FederatedStoreConfig(default_graph_ids=["b", "a"]))
    store.add_graph("a", make_graph("a", result=["a1", "shared"]))
    store.add_graph("b", make_graph("b", result=["b1", "shared"]))
    return store


class TestFederatedStoreSetup:
    def test_builtin_operations_are_store_specific(self, store):
        assert {ADD_GRAPH, REMOVE_GRAPH, GET_ALL_GRAPH_IDS} <= store.store_specific_operations()

    def test_config_operations_are_store_specific(self):
        store = FederatedStore(FederatedStoreConfig(store_specific_operations={"audit"}))
        assert "audit" in store.store_specific_operations()

    def test_add_duplicate_graph(self, store, make_graph):
        with pytest.raises(ExistsError):
            store.add_graph("a", make_graph("a"))

    def test_merger_uses_config(self):
        store = FederatedStore(FederatedStoreConfig(max_concurrent=3, skip_failed_graphs=True))
        merger = store.handler.output_merger

        assert merger.max_concurrent == 3
        assert merger.skip_failed_graphs is True
        assert merger.selector is store.handler.selector

    def test_independent_stores(self, make_graph):
        """Two stores in one process share no registry state."""
        first = FederatedStore()
        second = FederatedStore()
        first.add_graph("a", make_graph("a"))

        assert first.graphs.has("a")
        assert not second.graphs.has("a")


class TestFederatedStoreExecute:
    @pytest.mark.anyio
    async def test_output_operation_merged(self, store):
        op = Operation(operation_type="get_elements", kind=OperationKind.OUTPUT)
        assert await store.execute(op) == ["a1", "shared", "b1", "shared"]

    @pytest.mark.anyio
    async def test_output_operation_aggregated(self, store):
        op = Operation(
            operation_type="get_elements",
            kind=OperationKind.OUTPUT,
            options={"federated.aggregateElements": "true"},
        )
        assert await store.execute(op) == ["a1", "shared", "b1"]

    @pytest.mark.anyio
    async def test_plain_operation_on_selected_graphs(self, store, call_log):
        op = Operation(operation_type="add_elements", options={OPT_SHORT_GRAPH_IDS: "b"})

        assert await store.execute(op, RequestContext(user="bob")) is None
        assert call_log == [("b", "add_elements", "bob")]

    @pytest.mark.anyio
    async def test_noop_when_no_defaults(self, make_graph):
        store = FederatedStore()
        store.add_graph("a", make_graph("a"))

        assert await store.execute(Operation(operation_type="add_elements")) is NoOp

    @pytest.mark.anyio
    async def test_get_all_graph_ids(self, store, call_log):
        assert await store.execute(get_all_graph_ids_operation()) == ["a", "b"]
        assert call_log == []

    @pytest.mark.anyio
    async def test_add_and_remove_graph_operations(self, store, make_graph):
        await store.execute(add_graph_operation("c", make_graph("c")))
        assert store.graphs.list_ids() == ["a", "b", "c"]

        assert await store.execute(remove_graph_operation("c")) is True
        assert await store.execute(remove_graph_operation("c")) is False
        assert store.graphs.list_ids() == ["a", "b"]

    @pytest.mark.anyio
    async def test_native_chain(self, store, make_graph, call_log):
        """Chains of built-in operations run natively, in order."""
        chain = OperationChain(
            operations=(
                add_graph_operation("c", make_graph("c")),
                get_all_graph_ids_operation(),
            )
        )

        assert await store.execute(chain) == ["a", "b", "c"]
        assert call_log == []

    @pytest.mark.anyio
    async def test_mixed_chain_rejected(self, store, make_graph, call_log):
        chain = OperationChain(
            operations=(
                add_graph_operation("c", make_graph("c")),
                Operation(operation_type="get_elements", kind=OperationKind.OUTPUT),
            )
        )

        with pytest.raises(ChainPurityError):
            await store.execute(chain)

        assert not store.graphs.has("c")
        assert call_log == []

    @pytest.mark.anyio
    async def test_removed_graph_no_longer_resolves(self, store):
        store.remove_graph("b")
        op = Operation(operation_type="add_elements", options={OPT_GRAPH_IDS: "b"})

        with pytest.raises(GraphLookupError):
            await store.execute(op)

    @pytest.mark.anyio
    async def test_config_store_specific_without_handler(self):
        store = FederatedStore(FederatedStoreConfig(store_specific_operations={"audit"}))

        with pytest.raises(KeyError):
            await store.execute(Operation(operation_type="audit"))
