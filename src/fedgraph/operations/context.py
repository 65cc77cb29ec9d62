# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""RequestContext: request-scoped data passed to every backend call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

__all__ = ("RequestContext",)


@dataclass
class RequestContext:
    """Per-request context.

    The routing core reads ``user`` and ``cancelled`` and never mutates
    anything else. Callers request cancellation with ``cancel()``; the core
    stops issuing further target calls once it observes the flag.

    Attributes:
        user: Requesting principal, forwarded to each backend unchanged.
        request_id: Correlation id for logs.
        metadata: Free-form caller data.
    """

    user: Any = None
    request_id: UUID = field(default_factory=uuid4)
    metadata: dict[str, Any] = field(default_factory=dict)
    _cancelled: bool = field(default=False, init=False, repr=False)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
