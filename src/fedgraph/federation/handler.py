# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""FederatedOperationHandler: route one operation across member graphs.

Branches, evaluated in order:
1. Chain of only store-specific operations -> native chain executor.
2. Chain mixing store-specific and federated operations -> ChainPurityError.
3. Output-bearing operation -> output merger (resolves its own targets).
4. Otherwise run on each resolved graph in id order, stopping at the first
   failure. Zero resolved graphs returns NoOp.
"""

from __future__ import annotations

import logging
from typing import Any

from anyio.lowlevel import checkpoint

from fedgraph.errors import BackendExecutionError, RequestCancelledError
from fedgraph.operations import ChainExecutor, Operation, OperationKind, RequestContext
from fedgraph.types import NoOp

from .graph import GraphHandle
from .merger import FederatedOutputMerger, OutputMerger
from .purity import ChainPurity, chain_must_be_pure
from .registry import StoreRegistry
from .selector import TargetSelector

logger = logging.getLogger(__name__)

__all__ = ("FederatedOperationHandler",)


class FederatedOperationHandler:
    """Default handler for federated operations.

    Holds no per-request state; one instance may serve concurrent requests
    against any number of registries.

    Args:
        native_executor: Runs chains made only of store-specific operations.
        output_merger: Runs and merges output-bearing operations. Defaults
            to a FederatedOutputMerger sharing this handler's selector.
        selector: Target resolution strategy.
    """

    def __init__(
        self,
        native_executor: ChainExecutor,
        output_merger: OutputMerger | None = None,
        selector: TargetSelector | None = None,
    ) -> None:
        self.native_executor = native_executor
        self.selector = selector or TargetSelector()
        self.output_merger = output_merger or FederatedOutputMerger(self.selector)

    async def execute(
        self,
        operation: Operation,
        context: RequestContext,
        registry: StoreRegistry,
    ) -> Any:
        """Execute operation on the graphs it targets.

        Returns:
            Native chain result, merged output, None after a no-output
            operation ran, or NoOp when no graph was targeted.

        Raises:
            ChainPurityError: Chain mixes native and federated operations.
            GraphLookupError: A requested graph id is not registered.
            BackendExecutionError: A graph failed; later graphs were not run.
            RequestCancelledError: Context was cancelled mid-dispatch.
        """
        if operation.kind is OperationKind.CHAIN:
            purity = chain_must_be_pure(operation, registry.store_specific_operations())
            if purity is ChainPurity.NATIVE_ONLY:
                logger.debug("Chain is store-specific only, running natively")
                return await self.native_executor.execute(operation, context)

        if operation.has_output:
            return await self.output_merger.execute(operation, context, registry)

        targets = self.selector.resolve(operation, registry)
        if not targets:
            logger.debug("No graphs targeted by '%s'", operation.operation_type)
            return NoOp

        await self._execute_on_graphs(operation, context, targets)
        return None

    async def _execute_on_graphs(
        self,
        operation: Operation,
        context: RequestContext,
        targets: list[GraphHandle],
    ) -> None:
        completed: list[str] = []
        for handle in targets:
            await checkpoint()
            if context.cancelled:
                raise RequestCancelledError(
                    "Request cancelled before all graphs were executed",
                    details={
                        "completed": completed,
                        "remaining": [h.graph_id for h in targets[len(completed):]],
                    },
                )
            try:
                await handle.backend.execute(operation, context.user)
            except Exception as e:
                raise BackendExecutionError(
                    handle.graph_id,
                    operation.operation_type,
                    details={"completed": list(completed)},
                ) from e
            completed.append(handle.graph_id)
