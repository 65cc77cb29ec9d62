# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""TargetSelector: pick the member graphs an operation runs on.

The long-form graph ids option wins over the short form, which wins over
the store's default ids. Resolved handles are always de-duplicated and
sorted by id, so execution and merged result order never depend on the
order ids were written in.
"""

from __future__ import annotations

import logging

from fedgraph.operations import Operation

from .graph import GraphHandle
from .options import OPT_GRAPH_IDS, OPT_SHORT_GRAPH_IDS, parse_graph_ids
from .registry import StoreRegistry

logger = logging.getLogger(__name__)

__all__ = ("TargetSelector", "select_graph_ids")


def select_graph_ids(operation: Operation, default_ids: list[str]) -> list[str]:
    """Graph ids requested by the operation, in caller order, before lookup."""
    if operation.contains_option(OPT_GRAPH_IDS):
        return parse_graph_ids(operation.options[OPT_GRAPH_IDS])
    if operation.contains_option(OPT_SHORT_GRAPH_IDS):
        return parse_graph_ids(operation.options[OPT_SHORT_GRAPH_IDS])
    return list(default_ids)


class TargetSelector:
    """Resolve an operation to a sorted, duplicate-free list of GraphHandles."""

    def resolve(self, operation: Operation, registry: StoreRegistry) -> list[GraphHandle]:
        """Return the handles to execute on, sorted by graph id.

        Raises:
            GraphLookupError: If any requested id is not registered.
        """
        graph_ids = select_graph_ids(operation, registry.default_graph_ids())

        handles: dict[str, GraphHandle] = {}
        for graph_id in graph_ids:
            if graph_id not in handles:
                handles[graph_id] = registry.get_graph(graph_id)

        targets = sorted(handles.values(), key=lambda h: h.graph_id)
        logger.debug(
            "Resolved '%s' to graphs %s",
            operation.operation_type,
            [h.graph_id for h in targets],
        )
        return targets
