# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Handlers for the operations a store runs itself.

A store-native operation (add_graph, remove_graph, ...) is never sent to
member graphs. Its type name doubles as membership in the store-specific
set that chain purity checks classify against, so registering a handler
here is what makes an operation type "store-specific".
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from typing import Any

from fedgraph.errors import ExistsError

__all__ = ("OperationHandler", "OperationRegistry")

OperationHandler = Callable[..., Awaitable[Any]]
"""async (operation, ctx, input) -> result. ``input`` is the previous chain leaf's result."""


class OperationRegistry:
    """Store-native handlers keyed by operation type.

    Owned by one store. The GraphRegistry of that store reads ``names()``
    live, so handlers registered after construction still count as
    store-specific.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, OperationHandler] = {}

    def register(
        self,
        operation_type: str,
        handler: OperationHandler,
        *,
        override: bool = False,
    ) -> None:
        """Make operation_type store-native, run by handler.

        Raises:
            ValueError: operation_type is empty or handler is not callable.
            ExistsError: operation_type already has a handler and
                override=False.
        """
        if not operation_type:
            raise ValueError("operation_type must be a non-empty string")
        if not callable(handler):
            raise ValueError(f"Handler for '{operation_type}' is not callable")
        if operation_type in self._handlers and not override:
            raise ExistsError(
                f"Store already runs '{operation_type}' natively",
                details={"operation_type": operation_type},
            )
        self._handlers[operation_type] = handler

    def get(self, operation_type: str) -> OperationHandler:
        try:
            return self._handlers[operation_type]
        except KeyError:
            raise KeyError(
                f"Store has no native handler for '{operation_type}' "
                f"(native operations: {', '.join(self) or 'none'})"
            ) from None

    def unregister(self, operation_type: str) -> bool:
        """Stop running operation_type natively. Returns False if it was not native."""
        return self._handlers.pop(operation_type, None) is not None

    def names(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def __contains__(self, operation_type: object) -> bool:
        return operation_type in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"OperationRegistry(native={list(self)})"
