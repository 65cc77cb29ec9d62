# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""fedgraph Usage Examples

Routing Patterns:
    federated_routing   - Default vs. explicit graph ids, output merging,
                          fail-fast dispatch, native and mixed chains

Run:
    uv run python examples/federated_routing.py
"""

__all__ = [
    "federated_routing",
]
