"""Internal state holder for cancellation tokens.

Dataclass used by ``CancellationToken`` to track cancellation status, the
optional reason, the pending deadline handle armed by ``cancel_after`` and
whether that deadline fired (as opposed to a cascaded cancel).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    """Internal state for cooperative cancellation tokens."""

    cancelled: bool = False
    reason: Optional[str] = None
    expired: bool = False
    deadline: Optional[asyncio.TimerHandle] = None


__all__ = ["State"]
