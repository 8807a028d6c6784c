"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
in provider operations. It is distinct from ``asyncio.CancelledError`` so a
caller abort never looks like task teardown.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    This specialized error distinguishes cooperative cancellation from vendor
    failures, enabling targeted handling (suppress log noise, skip retry logic).
    """

__all__ = ["CancelledError"]
