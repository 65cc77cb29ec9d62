# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Federated Routing: one store fronting three in-memory member graphs.

Demonstrates FederatedStore with:
- Default graph ids vs. per-operation graph id options
- Output operations merged in graph-id order (concatenate vs. aggregate)
- Side-effecting operations dispatched sequentially, fail-fast
- Store-specific chains run natively; mixed chains rejected
"""

from __future__ import annotations

import asyncio

from fedgraph.errors import BackendExecutionError, ChainPurityError
from fedgraph.federation import OPT_AGGREGATE_ELEMENTS, OPT_GRAPH_IDS, FederatedStoreConfig
from fedgraph.operations import Operation, OperationChain, OperationKind, RequestContext
from fedgraph.store import FederatedStore, get_all_graph_ids_operation, remove_graph_operation


class MemoryGraph:
    """Member graph holding a list of elements."""

    def __init__(self, name: str, elements: list[str], read_only: bool = False):
        self.name = name
        self.elements = list(elements)
        self.read_only = read_only

    async def execute(self, operation: Operation, user):
        if operation.operation_type == "get_elements":
            return list(self.elements)
        if operation.operation_type == "add_elements":
            if self.read_only:
                raise PermissionError(f"{self.name} is read-only")
            self.elements.extend(operation.parameters["elements"])
            return None
        raise ValueError(f"Unsupported operation {operation.operation_type}")


async def main():
    print("=" * 60)
    print("Federated Routing Example")
    print("=" * 60)

    store = FederatedStore(
        FederatedStoreConfig(default_graph_ids=["roads", "rail"]),
    )
    store.add_graph("roads", MemoryGraph("roads", ["A1", "M25", "hub"]))
    store.add_graph("rail", MemoryGraph("rail", ["ECML", "hub"]))
    store.add_graph("vault", MemoryGraph("vault", ["old"], read_only=True))

    ctx = RequestContext(user="analyst")
    get_elements = Operation(operation_type="get_elements", kind=OperationKind.OUTPUT)

    print("\nDefault graphs, concatenated (rail < roads):")
    print(f"  {await store.execute(get_elements, ctx)}")

    print("\nDefault graphs, aggregated:")
    aggregated = get_elements.with_option(OPT_AGGREGATE_ELEMENTS, "true")
    print(f"  {await store.execute(aggregated, ctx)}")

    print("\nExplicit graph ids 'roads,vault':")
    explicit = get_elements.with_option(OPT_GRAPH_IDS, "roads,vault")
    print(f"  {await store.execute(explicit, ctx)}")

    print("\nAdd elements to every graph (vault is read-only):")
    add = Operation(
        operation_type="add_elements",
        options={OPT_GRAPH_IDS: "roads,rail,vault"},
        parameters={"elements": ["new"]},
    )
    try:
        await store.execute(add, ctx)
    except BackendExecutionError as e:
        print(f"  failed on {e.graph_id}, completed first: {e.details['completed']}")

    print("\nNative chain (remove vault, list graphs):")
    chain = OperationChain(
        operations=(remove_graph_operation("vault"), get_all_graph_ids_operation())
    )
    print(f"  {await store.execute(chain, ctx)}")

    print("\nMixed chain:")
    try:
        await store.execute(
            OperationChain(operations=(get_all_graph_ids_operation(), get_elements)), ctx
        )
    except ChainPurityError as e:
        print(f"  rejected: {e.message}")

    print()
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
