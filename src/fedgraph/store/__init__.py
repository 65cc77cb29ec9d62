# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Store: FederatedStore facade and built-in store-specific operations."""

from .operations import (
    ADD_GRAPH,
    GET_ALL_GRAPH_IDS,
    REMOVE_GRAPH,
    add_graph_operation,
    get_all_graph_ids_operation,
    remove_graph_operation,
)
from .store import FederatedStore

__all__ = (
    "ADD_GRAPH",
    "GET_ALL_GRAPH_IDS",
    "REMOVE_GRAPH",
    "FederatedStore",
    "add_graph_operation",
    "get_all_graph_ids_operation",
    "remove_graph_operation",
)
