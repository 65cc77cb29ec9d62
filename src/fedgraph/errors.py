# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error hierarchy for federated operation routing.

Every error carries a ``details`` dict and, where it applies, the
``FailureStage`` that produced it. Errors are never retried or translated
by the routing core; they propagate to the caller as request-level errors.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = (
    "BackendExecutionError",
    "ChainPurityError",
    "ConfigurationError",
    "ExistsError",
    "FailureStage",
    "FederationError",
    "GraphLookupError",
    "RequestCancelledError",
)


class FailureStage(str, Enum):
    """Routing stage a failure originated from."""

    PURITY_CHECK = "purity_check"
    TARGET_RESOLUTION = "target_resolution"
    EXECUTION = "execution"


class FederationError(Exception):
    """Base error for the federation layer.

    Attributes:
        message: Human-readable description.
        details: Structured context for callers and logs.
        stage: Routing stage that failed, if known.
    """

    default_stage: FailureStage | None = None

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        stage: FailureStage | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})
        self.stage = stage if stage is not None else self.default_stage

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "stage": self.stage.value if self.stage is not None else None,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.stage is None:
            return self.message
        return f"[{self.stage.value}] {self.message}"


class ConfigurationError(FederationError):
    """Invalid store or registry configuration."""


class ExistsError(FederationError):
    """An item with the same identifier is already registered."""


class ChainPurityError(FederationError):
    """Chain mixes store-specific operations with federated operations."""

    default_stage = FailureStage.PURITY_CHECK


class GraphLookupError(FederationError):
    """A requested graph id has no registered handle."""

    default_stage = FailureStage.TARGET_RESOLUTION

    def __init__(self, graph_id: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"Graph '{graph_id}' is not registered",
            details={"graph_id": graph_id, **(details or {})},
        )
        self.graph_id = graph_id


class BackendExecutionError(FederationError):
    """A member graph failed to execute an operation.

    The backend's own exception is chained as ``__cause__``.
    """

    default_stage = FailureStage.EXECUTION

    def __init__(
        self,
        graph_id: str,
        operation_type: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Graph '{graph_id}' failed to execute '{operation_type}'",
            details={
                "graph_id": graph_id,
                "operation_type": operation_type,
                **(details or {}),
            },
        )
        self.graph_id = graph_id


class RequestCancelledError(FederationError):
    """Request was cancelled before all targets were dispatched."""

    default_stage = FailureStage.EXECUTION
