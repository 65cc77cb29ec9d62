# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Operations: immutable request values and store-native execution.

Core types:
    Operation: Single operation with routing options and a kind tag.
    OperationChain: Ordered (possibly nested) sequence of operations.
    OperationKind: CHAIN / OUTPUT / PLAIN tag.
    RequestContext: Request-scoped user and cancellation flag.

Native execution:
    OperationRegistry: Operation type -> async handler mapping.
    NativeChainExecutor: Runs a chain through an OperationRegistry.
"""

from __future__ import annotations

from .chain import ChainExecutor, NativeChainExecutor
from .context import RequestContext
from .node import Operation, OperationChain, OperationKind
from .registry import OperationHandler, OperationRegistry

__all__ = (
    "ChainExecutor",
    "NativeChainExecutor",
    "Operation",
    "OperationChain",
    "OperationHandler",
    "OperationKind",
    "OperationRegistry",
    "RequestContext",
)
