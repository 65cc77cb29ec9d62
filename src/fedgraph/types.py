# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Sentinel values shared across fedgraph."""

from __future__ import annotations

from typing import Any, Final, Literal

__all__ = ("NoOp", "NoOpType", "is_noop")


class NoOpType:
    """Result of an operation that resolved to zero target graphs.

    Singleton, falsy, and distinct from ``None`` (which means the operation
    ran and produced no output).
    """

    __slots__ = ()
    _instance: NoOpType | None = None

    def __new__(cls) -> NoOpType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> str:
        return "NoOp"

    def __reduce__(self) -> str:
        return "NoOp"

    def __copy__(self) -> NoOpType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> NoOpType:
        return self


NoOp: Final = NoOpType()


def is_noop(value: Any) -> bool:
    """True if value is the NoOp sentinel."""
    return value is NoOp
