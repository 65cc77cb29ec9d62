# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Chain purity: a chain is either all store-native or all federated."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from fedgraph.errors import ChainPurityError
from fedgraph.operations import OperationChain

__all__ = ("ChainPurity", "chain_must_be_pure", "classify_chain")


class ChainPurity(str, Enum):
    NATIVE_ONLY = "native_only"
    FEDERATED_ONLY = "federated_only"
    MIXED = "mixed"


def classify_chain(chain: OperationChain, store_specific: Iterable[str]) -> ChainPurity:
    """Classify a chain by the set of its leaf operation types."""
    native = frozenset(store_specific)
    kinds = {op.operation_type for op in chain.flatten()}
    if kinds <= native:
        return ChainPurity.NATIVE_ONLY
    if kinds.isdisjoint(native):
        return ChainPurity.FEDERATED_ONLY
    return ChainPurity.MIXED


def chain_must_be_pure(chain: OperationChain, store_specific: Iterable[str]) -> ChainPurity:
    """Classify a chain. Raise ChainPurityError if it is MIXED."""
    native = frozenset(store_specific)
    purity = classify_chain(chain, native)
    if purity is ChainPurity.MIXED:
        kinds = {op.operation_type for op in chain.flatten()}
        raise ChainPurityError(
            "Chain contains standard operations alongside federated store "
            "specific operations. Please submit each type separately.",
            details={
                "store_specific": sorted(kinds & native),
                "federated": sorted(kinds - native),
            },
        )
    return purity
