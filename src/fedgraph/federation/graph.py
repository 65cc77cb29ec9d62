# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""GraphHandle: a member graph id paired with its executable backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fedgraph.operations import Operation

__all__ = ("ExecutableGraph", "GraphHandle")


@runtime_checkable
class ExecutableGraph(Protocol):
    """Backend contract every member graph satisfies."""

    async def execute(self, operation: Operation, user: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class GraphHandle:
    """Immutable (graph_id, backend) pair.

    The registry that created the handle owns the backend; handles are
    transient references held for one request.
    """

    graph_id: str
    backend: ExecutableGraph = field(compare=False, repr=False)

    def __lt__(self, other: GraphHandle) -> bool:
        if not isinstance(other, GraphHandle):
            return NotImplemented
        return self.graph_id < other.graph_id

    def __repr__(self) -> str:
        return f"GraphHandle(graph_id={self.graph_id!r})"
