# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in store-specific operations.

These manage the federation itself, so they run on the hosting store and
are never sent to member graphs. FederatedStore binds itself to each
handler's ``store`` keyword when registering them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fedgraph.operations import Operation, OperationKind, RequestContext

if TYPE_CHECKING:
    from .store import FederatedStore

__all__ = (
    "ADD_GRAPH",
    "BUILTIN_OPERATIONS",
    "GET_ALL_GRAPH_IDS",
    "REMOVE_GRAPH",
    "add_graph",
    "add_graph_operation",
    "get_all_graph_ids",
    "get_all_graph_ids_operation",
    "remove_graph",
    "remove_graph_operation",
)

ADD_GRAPH = "add_graph"
REMOVE_GRAPH = "remove_graph"
GET_ALL_GRAPH_IDS = "get_all_graph_ids"


async def add_graph(
    operation: Operation, ctx: RequestContext, input: Any = None, *, store: FederatedStore
) -> None:
    """Register parameters["backend"] under parameters["graph_id"]."""
    store.add_graph(
        operation.parameters["graph_id"],
        operation.parameters["backend"],
        override=bool(operation.parameters.get("override", False)),
    )


async def remove_graph(
    operation: Operation, ctx: RequestContext, input: Any = None, *, store: FederatedStore
) -> bool:
    """Unregister parameters["graph_id"]. Returns False if it was not registered."""
    graph_id = operation.parameters["graph_id"]
    if not store.graphs.has(graph_id):
        return False
    store.remove_graph(graph_id)
    return True


async def get_all_graph_ids(
    operation: Operation, ctx: RequestContext, input: Any = None, *, store: FederatedStore
) -> list[str]:
    """Sorted ids of every registered graph."""
    return store.graphs.list_ids()


BUILTIN_OPERATIONS = (
    (ADD_GRAPH, add_graph),
    (REMOVE_GRAPH, remove_graph),
    (GET_ALL_GRAPH_IDS, get_all_graph_ids),
)


def add_graph_operation(graph_id: str, backend: Any, *, override: bool = False) -> Operation:
    return Operation(
        operation_type=ADD_GRAPH,
        parameters={"graph_id": graph_id, "backend": backend, "override": override},
    )


def remove_graph_operation(graph_id: str) -> Operation:
    return Operation(operation_type=REMOVE_GRAPH, parameters={"graph_id": graph_id})


def get_all_graph_ids_operation() -> Operation:
    return Operation(operation_type=GET_ALL_GRAPH_IDS, kind=OperationKind.OUTPUT)
