# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Graph registry: member graph lookup plus store-level routing config."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from fedgraph.errors import ExistsError, GraphLookupError

from .config import FederatedStoreConfig
from .graph import ExecutableGraph, GraphHandle

if TYPE_CHECKING:
    from fedgraph.operations import OperationRegistry

__all__ = ("GraphRegistry", "StoreRegistry")


@runtime_checkable
class StoreRegistry(Protocol):
    """Read-only view the routing core needs from a store."""

    def default_graph_ids(self) -> list[str]: ...

    def store_specific_operations(self) -> frozenset[str]: ...

    def get_graph(self, graph_id: str) -> GraphHandle: ...


class GraphRegistry:
    """Member graph registry with O(1) id lookup.

    Owns the backends it registers; handed-out GraphHandles are transient
    references. Graph ids must be unique; duplicates raise ExistsError
    unless override=True.

    Example:
        >>> registry = GraphRegistry(FederatedStoreConfig(default_graph_ids=["a"]))
        >>> registry.register("a", backend_a)
        >>> registry.get_graph("a").backend is backend_a
        True
    """

    def __init__(
        self,
        config: FederatedStoreConfig | None = None,
        native_operations: OperationRegistry | None = None,
    ) -> None:
        self.config = config or FederatedStoreConfig()
        self.native_operations = native_operations
        self._graphs: dict[str, GraphHandle] = {}

    def register(
        self,
        graph_id: str,
        backend: ExecutableGraph,
        *,
        override: bool = False,
    ) -> GraphHandle:
        """Register a backend under graph_id.

        Raises:
            ValueError: If graph_id is empty or contains ','.
            ExistsError: If graph_id exists and override=False.
        """
        if not graph_id or "," in graph_id or graph_id != graph_id.strip():
            raise ValueError(f"Invalid graph id {graph_id!r}")
        if graph_id in self._graphs and not override:
            raise ExistsError(
                f"Graph '{graph_id}' already registered",
                details={"graph_id": graph_id},
            )
        handle = GraphHandle(graph_id=graph_id, backend=backend)
        self._graphs[graph_id] = handle
        return handle

    def unregister(self, graph_id: str) -> GraphHandle:
        """Remove and return a graph handle. Raises GraphLookupError if not found."""
        if graph_id not in self._graphs:
            raise GraphLookupError(graph_id, details={"available": self.list_ids()})
        return self._graphs.pop(graph_id)

    def get_graph(self, graph_id: str) -> GraphHandle:
        """Get handle by id. Raises GraphLookupError if not found."""
        try:
            return self._graphs[graph_id]
        except KeyError:
            raise GraphLookupError(
                graph_id, details={"available": self.list_ids()}
            ) from None

    def has(self, graph_id: str) -> bool:
        return graph_id in self._graphs

    def list_ids(self) -> list[str]:
        """Registered graph ids, sorted."""
        return sorted(self._graphs)

    def default_graph_ids(self) -> list[str]:
        return list(self.config.default_graph_ids)

    def store_specific_operations(self) -> frozenset[str]:
        """Operation types the store executes itself, never federated."""
        kinds = set(self.config.store_specific_operations)
        if self.native_operations is not None:
            kinds |= self.native_operations.names()
        return frozenset(kinds)

    def clear(self) -> None:
        self._graphs.clear()

    def __len__(self) -> int:
        return len(self._graphs)

    def __contains__(self, graph_id: str) -> bool:
        return graph_id in self._graphs

    def __repr__(self) -> str:
        return f"GraphRegistry(graphs={self.list_ids()})"
