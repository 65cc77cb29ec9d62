# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Operation option keys recognised by the federation layer."""

from __future__ import annotations

__all__ = (
    "OPT_AGGREGATE_ELEMENTS",
    "OPT_GRAPH_IDS",
    "OPT_SHORT_GRAPH_IDS",
    "parse_bool_option",
    "parse_graph_ids",
)

OPT_GRAPH_IDS = "gaffer.federatedstore.operation.graphIds"
"""Comma-separated graph ids to execute on. Takes precedence over the short form."""

OPT_SHORT_GRAPH_IDS = "federated.graphIds"
"""Short form of OPT_GRAPH_IDS."""

OPT_AGGREGATE_ELEMENTS = "federated.aggregateElements"
"""Boolean option read by the output merger: aggregate instead of concatenate."""


def parse_graph_ids(value: str) -> list[str]:
    """Split a comma-separated id list, keeping the caller's order.

    Surrounding whitespace is stripped and empty segments are ignored.
    """
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_bool_option(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() == "true"
