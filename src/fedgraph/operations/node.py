# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Operation and OperationChain: immutable request values.

An operation names what to do (``operation_type``), carries string options
that steer routing (target graph ids, aggregation), and free-form
parameters for the backend. ``kind`` is an explicit tag the handler
switches on instead of inspecting runtime types.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

__all__ = ("Operation", "OperationChain", "OperationKind")


class OperationKind(str, Enum):
    """Closed set of operation shapes."""

    CHAIN = "chain"
    OUTPUT = "output"
    PLAIN = "plain"


class Operation(BaseModel):
    """Single operation submitted to a store.

    Attributes:
        operation_type: Operation kind name used for registry and purity checks.
        kind: OUTPUT if the operation returns data, PLAIN if side-effecting only.
        options: String key/value routing metadata. Read-only.
        parameters: Backend-specific payload, opaque to routing. The mapping
            is read-only; the values themselves are not copied.
    """

    model_config = ConfigDict(frozen=True)

    operation_type: str = Field(..., min_length=1)
    kind: OperationKind = OperationKind.PLAIN
    options: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    parameters: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("options", "parameters", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("options", "parameters")
    def _serialize_mapping(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    @model_validator(mode="after")
    def _chain_kind_only_on_chains(self) -> Operation:
        if self.kind is OperationKind.CHAIN and not isinstance(self, OperationChain):
            raise ValueError("kind=CHAIN is reserved for OperationChain")
        return self

    @property
    def is_chain(self) -> bool:
        return self.kind is OperationKind.CHAIN

    @property
    def has_output(self) -> bool:
        """True if executing this operation yields a result."""
        return self.kind is OperationKind.OUTPUT

    def contains_option(self, key: str) -> bool:
        return key in self.options

    def get_option(self, key: str, default: str | None = None) -> str | None:
        return self.options.get(key, default)

    def with_options(self, **options: str) -> Operation:
        """Return a copy with extra options merged over the existing ones."""
        return self.model_copy(update={"options": MappingProxyType({**self.options, **options})})

    def with_option(self, key: str, value: str) -> Operation:
        """Like with_options, for keys that are not valid identifiers."""
        return self.with_options(**{key: value})

    def flatten(self) -> list[Operation]:
        """Leaf operations in execution order. A single operation is its own leaf."""
        return [self]

    def __repr__(self) -> str:
        return f"Operation(type={self.operation_type}, kind={self.kind.value})"


class OperationChain(Operation):
    """Ordered sequence of operations executed as one request.

    Chains may nest; ``flatten()`` returns every leaf in order. A chain
    produces output when its last leaf does.
    """

    operation_type: str = "operation_chain"
    kind: Literal[OperationKind.CHAIN] = OperationKind.CHAIN
    operations: tuple[Operation, ...] = Field(default_factory=tuple)

    @property
    def has_output(self) -> bool:
        leaves = self.flatten()
        return bool(leaves) and leaves[-1].has_output

    def iter_leaves(self) -> Iterator[Operation]:
        for op in self.operations:
            if op.is_chain:
                yield from op.flatten()
            else:
                yield op

    def flatten(self) -> list[Operation]:
        return list(self.iter_leaves())

    def __repr__(self) -> str:
        types = [op.operation_type for op in self.operations]
        return f"OperationChain(operations={types})"
