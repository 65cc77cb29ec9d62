# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""NativeChainExecutor: runs a chain with the store's own handlers."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from .context import RequestContext
from .node import OperationChain
from .registry import OperationRegistry

logger = logging.getLogger(__name__)

__all__ = ("ChainExecutor", "NativeChainExecutor")


@runtime_checkable
class ChainExecutor(Protocol):
    async def execute(self, chain: OperationChain, context: RequestContext) -> Any: ...


class NativeChainExecutor:
    """Execute every leaf of a chain through an OperationRegistry.

    Leaves run in order; each result is passed as ``input`` to the next
    handler and the last result is returned. An empty chain returns None.
    """

    def __init__(self, registry: OperationRegistry) -> None:
        self.registry = registry

    async def execute(self, chain: OperationChain, context: RequestContext) -> Any:
        result: Any = None
        for operation in chain.flatten():
            handler = self.registry.get(operation.operation_type)
            logger.debug(
                "Running native operation '%s' (request %s)",
                operation.operation_type,
                context.request_id,
            )
            result = await handler(operation, context, result)
        return result
