# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Output merging for operations that return data.

The federated handler hands every output-bearing operation to an
OutputMerger, which resolves its own targets, runs the operation on each
and combines the per-graph results. FederatedOutputMerger is the default:
concurrent fan-out, results combined in sorted graph-id order.

Merge modes (per operation, via ``federated.aggregateElements``):
    false (default): concatenate per-graph results.
    true: pass the concatenated results through ``aggregator``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

import anyio

from fedgraph.errors import BackendExecutionError, FederationError, RequestCancelledError
from fedgraph.operations import Operation, RequestContext

from .graph import GraphHandle
from .options import OPT_AGGREGATE_ELEMENTS, parse_bool_option
from .registry import StoreRegistry
from .selector import TargetSelector

logger = logging.getLogger(__name__)

__all__ = ("FederatedOutputMerger", "OutputMerger", "distinct_elements")

Aggregator = Callable[[list[Any]], Any]


@runtime_checkable
class OutputMerger(Protocol):
    async def execute(
        self, operation: Operation, context: RequestContext, registry: StoreRegistry
    ) -> Any: ...


def distinct_elements(elements: list[Any]) -> list[Any]:
    """Drop repeated elements, keeping first occurrences in order."""
    seen: set[Any] = set()
    unhashable: list[Any] = []
    out: list[Any] = []
    for element in elements:
        try:
            if element in seen:
                continue
            seen.add(element)
        except TypeError:
            if element in unhashable:
                continue
            unhashable.append(element)
        out.append(element)
    return out


def _as_elements(result: Any) -> list[Any]:
    if result is None:
        return []
    if isinstance(result, (str, bytes, Mapping)) or not isinstance(result, Iterable):
        return [result]
    return list(result)


class FederatedOutputMerger:
    """Run an output-bearing operation on every target and merge results.

    Args:
        selector: Target resolution, shared with the federated handler.
        max_concurrent: Max graphs queried at once.
        skip_failed_graphs: Log and skip failing graphs instead of failing
            the request.
        aggregator: Applied to the concatenated elements when the operation
            asks for aggregation. Defaults to distinct_elements.
    """

    def __init__(
        self,
        selector: TargetSelector | None = None,
        *,
        max_concurrent: int = 10,
        skip_failed_graphs: bool = False,
        aggregator: Aggregator | None = None,
    ) -> None:
        self.selector = selector or TargetSelector()
        self.max_concurrent = max_concurrent
        self.skip_failed_graphs = skip_failed_graphs
        self.aggregator = aggregator or distinct_elements

    async def execute(
        self, operation: Operation, context: RequestContext, registry: StoreRegistry
    ) -> Any:
        targets = self.selector.resolve(operation, registry)
        if not targets:
            return []

        results = await self._gather(operation, context, targets)

        elements: list[Any] = []
        for result in results:
            elements.extend(_as_elements(result))

        if parse_bool_option(operation.get_option(OPT_AGGREGATE_ELEMENTS)):
            return self.aggregator(elements)
        return elements

    async def _gather(
        self,
        operation: Operation,
        context: RequestContext,
        targets: list[GraphHandle],
    ) -> list[Any]:
        """Per-graph results in target order. Skipped graphs yield None."""
        results: list[Any] = [None] * len(targets)
        errors: dict[int, FederationError] = {}
        limiter = anyio.CapacityLimiter(self.max_concurrent)

        async with anyio.create_task_group() as tg:

            async def run(index: int, handle: GraphHandle) -> None:
                async with limiter:
                    if context.cancelled:
                        errors[index] = RequestCancelledError(
                            "Request cancelled before querying all graphs",
                            details={"graph_id": handle.graph_id},
                        )
                        return
                    try:
                        results[index] = await handle.backend.execute(
                            operation, context.user
                        )
                    except Exception as e:
                        if self.skip_failed_graphs:
                            logger.exception(
                                "Graph '%s' failed '%s', skipping",
                                handle.graph_id,
                                operation.operation_type,
                            )
                            return
                        error = BackendExecutionError(
                            handle.graph_id, operation.operation_type
                        )
                        error.__cause__ = e
                        errors[index] = error
                        tg.cancel_scope.cancel()

            for index, handle in enumerate(targets):
                tg.start_soon(run, index, handle)

        if errors:
            raise errors[min(errors)]
        return results
