# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Configuration for a federated store.

Injected into registries and handlers rather than read from global state,
so several stores with different settings can live in one process.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fedgraph.errors import ConfigurationError

__all__ = ("FederatedStoreConfig",)


class FederatedStoreConfig(BaseModel):
    """Federated store settings.

    Attributes:
        default_graph_ids: Graphs used when an operation names none.
        store_specific_operations: Extra operation types the store runs
            natively, on top of its registered native handlers.
        max_concurrent: Fan-out bound for the output merger.
        skip_failed_graphs: Merger skips failing graphs instead of failing.
    """

    model_config = ConfigDict(frozen=True)

    default_graph_ids: list[str] = Field(default_factory=list)
    store_specific_operations: frozenset[str] = Field(default_factory=frozenset)
    max_concurrent: int = Field(default=10, ge=1)
    skip_failed_graphs: bool = False

    @field_validator("default_graph_ids")
    @classmethod
    def _validate_graph_ids(cls, value: list[str]) -> list[str]:
        seen: dict[str, None] = {}
        for graph_id in value:
            graph_id = graph_id.strip()
            if not graph_id:
                raise ValueError("Graph ids must be non-empty")
            if "," in graph_id:
                raise ValueError(f"Graph id {graph_id!r} must not contain ','")
            seen.setdefault(graph_id, None)
        return list(seen)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FederatedStoreConfig:
        """Build from plain data (e.g. a parsed JSON/YAML document).

        Raises:
            ConfigurationError: If the data does not validate.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid federated store configuration",
                details={"errors": e.errors(include_url=False)},
            ) from e
