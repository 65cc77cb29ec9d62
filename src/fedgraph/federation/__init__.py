# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Federation: route operations across member graphs.

Routing:
    TargetSelector: Operation -> sorted list of GraphHandles.
    classify_chain / chain_must_be_pure: native vs federated chains.
    FederatedOperationHandler: purity check, target selection, dispatch.

Collaborators:
    OutputMerger / FederatedOutputMerger: output-bearing operations.
    GraphRegistry / StoreRegistry: graph lookup and routing config.
    FederatedStoreConfig: injected store settings.
"""

from __future__ import annotations

from .config import FederatedStoreConfig
from .graph import ExecutableGraph, GraphHandle
from .handler import FederatedOperationHandler
from .merger import FederatedOutputMerger, OutputMerger, distinct_elements
from .options import (
    OPT_AGGREGATE_ELEMENTS,
    OPT_GRAPH_IDS,
    OPT_SHORT_GRAPH_IDS,
    parse_bool_option,
    parse_graph_ids,
)
from .purity import ChainPurity, chain_must_be_pure, classify_chain
from .registry import GraphRegistry, StoreRegistry
from .selector import TargetSelector, select_graph_ids

__all__ = (
    "OPT_AGGREGATE_ELEMENTS",
    "OPT_GRAPH_IDS",
    "OPT_SHORT_GRAPH_IDS",
    "ChainPurity",
    "ExecutableGraph",
    "FederatedOperationHandler",
    "FederatedOutputMerger",
    "FederatedStoreConfig",
    "GraphHandle",
    "GraphRegistry",
    "OutputMerger",
    "StoreRegistry",
    "TargetSelector",
    "chain_must_be_pure",
    "classify_chain",
    "distinct_elements",
    "parse_bool_option",
    "parse_graph_ids",
    "select_graph_ids",
)
