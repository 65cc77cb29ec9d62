# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""FederatedStore: a store fronting several member graphs.

Owns the graph registry, the native operation registry and the federated
handler. Store-specific operations run here; everything else is routed
to member graphs.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from fedgraph.federation import (
    ExecutableGraph,
    FederatedOperationHandler,
    FederatedOutputMerger,
    FederatedStoreConfig,
    GraphHandle,
    GraphRegistry,
    OutputMerger,
    TargetSelector,
)
from fedgraph.operations import (
    NativeChainExecutor,
    Operation,
    OperationKind,
    OperationRegistry,
    RequestContext,
)

from .operations import BUILTIN_OPERATIONS

logger = logging.getLogger(__name__)

__all__ = ("FederatedStore",)


class FederatedStore:
    """Federated store facade.

    Example:
        store = FederatedStore(FederatedStoreConfig(default_graph_ids=["a", "b"]))
        store.add_graph("a", graph_a)
        store.add_graph("b", graph_b)
        rows = await store.execute(get_elements, RequestContext(user="alice"))

    Args:
        config: Store settings; defaults to an empty configuration.
        output_merger: Overrides the default FederatedOutputMerger.
        selector: Overrides target selection for both handler and merger.
    """

    def __init__(
        self,
        config: FederatedStoreConfig | None = None,
        *,
        output_merger: OutputMerger | None = None,
        selector: TargetSelector | None = None,
    ) -> None:
        self.config = config or FederatedStoreConfig()
        self.operations = OperationRegistry()
        for name, handler in BUILTIN_OPERATIONS:
            self.operations.register(name, partial(handler, store=self))

        self.graphs = GraphRegistry(self.config, native_operations=self.operations)

        selector = selector or TargetSelector()
        if output_merger is None:
            output_merger = FederatedOutputMerger(
                selector,
                max_concurrent=self.config.max_concurrent,
                skip_failed_graphs=self.config.skip_failed_graphs,
            )
        self.handler = FederatedOperationHandler(
            NativeChainExecutor(self.operations),
            output_merger=output_merger,
            selector=selector,
        )

    def add_graph(
        self, graph_id: str, backend: ExecutableGraph, *, override: bool = False
    ) -> GraphHandle:
        handle = self.graphs.register(graph_id, backend, override=override)
        logger.debug("Added graph '%s'", graph_id)
        return handle

    def remove_graph(self, graph_id: str) -> GraphHandle:
        handle = self.graphs.unregister(graph_id)
        logger.debug("Removed graph '%s'", graph_id)
        return handle

    def store_specific_operations(self) -> frozenset[str]:
        return self.graphs.store_specific_operations()

    async def execute(
        self, operation: Operation, context: RequestContext | None = None
    ) -> Any:
        """Run operation natively or across member graphs.

        A single store-specific operation goes straight to its native
        handler. Chains and all other operations go through the federated
        handler.

        Raises:
            KeyError: A store-specific type has no registered native handler.
        """
        context = context or RequestContext()
        if (
            operation.kind is not OperationKind.CHAIN
            and operation.operation_type in self.store_specific_operations()
        ):
            handler = self.operations.get(operation.operation_type)
            return await handler(operation, context, None)
        return await self.handler.execute(operation, context, self.graphs)

    def __repr__(self) -> str:
        return f"FederatedStore(graphs={self.graphs.list_ids()})"
