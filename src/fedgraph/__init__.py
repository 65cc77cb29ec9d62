# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""fedgraph - Operation routing for federated graph stores.

Top-level re-exports for convenient imports:
- fedgraph.FederatedStore -> fedgraph.store
- fedgraph.FederatedOperationHandler, TargetSelector -> fedgraph.federation
- fedgraph.Operation, OperationChain, RequestContext -> fedgraph.operations
- fedgraph.NoOp -> fedgraph.types

Uses lazy loading for fast import.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # federation
    "FederatedOperationHandler": ("fedgraph.federation", "FederatedOperationHandler"),
    "FederatedOutputMerger": ("fedgraph.federation", "FederatedOutputMerger"),
    "FederatedStoreConfig": ("fedgraph.federation", "FederatedStoreConfig"),
    "GraphHandle": ("fedgraph.federation", "GraphHandle"),
    "GraphRegistry": ("fedgraph.federation", "GraphRegistry"),
    "TargetSelector": ("fedgraph.federation", "TargetSelector"),
    # operations
    "Operation": ("fedgraph.operations", "Operation"),
    "OperationChain": ("fedgraph.operations", "OperationChain"),
    "OperationKind": ("fedgraph.operations", "OperationKind"),
    "RequestContext": ("fedgraph.operations", "RequestContext"),
    # store
    "FederatedStore": ("fedgraph.store", "FederatedStore"),
    # types
    "NoOp": ("fedgraph.types", "NoOp"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'fedgraph' has no attribute {name!r}")


def __dir__() -> list[str]:
    return list(__all__)


if TYPE_CHECKING:
    from fedgraph.federation import (
        FederatedOperationHandler,
        FederatedOutputMerger,
        FederatedStoreConfig,
        GraphHandle,
        GraphRegistry,
        TargetSelector,
    )
    from fedgraph.operations import (
        Operation,
        OperationChain,
        OperationKind,
        RequestContext,
    )
    from fedgraph.store import FederatedStore
    from fedgraph.types import NoOp

__all__ = (
    "FederatedOperationHandler",
    "FederatedOutputMerger",
    "FederatedStore",
    "FederatedStoreConfig",
    "GraphHandle",
    "GraphRegistry",
    "NoOp",
    "Operation",
    "OperationChain",
    "OperationKind",
    "RequestContext",
    "TargetSelector",
)
