# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: in-memory member graphs that record their calls."""

from __future__ import annotations

from typing import Any

import pytest

from fedgraph.federation import FederatedStoreConfig, GraphRegistry


class RecordingGraph:
    """Member graph that appends (graph_id, operation_type, user) to a shared log."""

    def __init__(
        self,
        graph_id: str,
        log: list[tuple[str, str, Any]],
        *,
        result: Any = None,
        error: Exception | None = None,
    ) -> None:
        self.graph_id = graph_id
        self.log = log
        self.result = result
        self.error = error

    async def execute(self, operation, user):
        self.log.append((self.graph_id, operation.operation_type, user))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def call_log() -> list[tuple[str, str, Any]]:
    return []


@pytest.fixture
def make_graph(call_log):
    """Factory: make_graph("a", result=[1], error=None) -> RecordingGraph."""

    def _make(graph_id: str, **kw: Any) -> RecordingGraph:
        return RecordingGraph(graph_id, call_log, **kw)

    return _make


@pytest.fixture
def make_registry(make_graph):
    """Factory building a GraphRegistry with one RecordingGraph per id."""

    def _make(
        graph_ids: list[str],
        *,
        defaults: list[str] | None = None,
        store_specific: set[str] | None = None,
        results: dict[str, Any] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> GraphRegistry:
        config = FederatedStoreConfig(
            default_graph_ids=list(graph_ids if defaults is None else defaults),
            store_specific_operations=frozenset(store_specific or ()),
        )
        registry = GraphRegistry(config)
        for graph_id in graph_ids:
            registry.register(
                graph_id,
                make_graph(
                    graph_id,
                    result=(results or {}).get(graph_id),
                    error=(errors or {}).get(graph_id),
                ),
            )
        return registry

    return _make
