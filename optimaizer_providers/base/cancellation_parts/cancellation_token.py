"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used across adapters to abort
in-flight requests and streams. Besides cooperative polling the token keeps a
list of callbacks fired exactly once on cancellation; the async helpers use
them to interrupt a pending network read.
"""

from __future__ import annotations

import asyncio
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError

TIMEOUT_REASON = "timeout"

Callback = Callable[[str | None], None]


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage. Child tokens
    inherit cancellation when the parent is cancelled; cancelling a child never
    affects its parent.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callback] = []
        self._parent = parent
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def timed_out(self) -> bool:
        """Whether the token was cancelled by its own deadline.

        A child cancelled because its parent timed out reports ``False``.
        """
        return self._state.expired

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, fire callbacks, cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._callbacks)
            self._callbacks.clear()
            deadline, self._state.deadline = self._state.deadline, None
        if deadline is not None:
            deadline.cancel()
        for callback in callbacks:
            callback(reason)
        for child in children:
            child.cancel(reason)

    def add_callback(self, callback: Callback) -> Callable[[], None]:
        """Register ``callback`` to run on cancellation; returns a remover.

        When the token is already cancelled the callback runs immediately.
        """
        with self._lock:
            fire_now = self._state.cancelled
            if not fire_now:
                self._callbacks.append(callback)
        if fire_now:
            callback(self._state.reason)

        def _remove() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return _remove

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Forget a previously linked child (no-op when absent)."""
        with self._lock:
            if token in self._children:
                self._children.remove(token)

    def cancel_after(self, seconds: float) -> None:
        """Arm a deadline on the running event loop; ``seconds <= 0`` is inert."""
        if seconds <= 0 or self._state.cancelled:
            return
        handle = asyncio.get_running_loop().call_later(seconds, self._expire)
        with self._lock:
            previous, self._state.deadline = self._state.deadline, handle
        if previous is not None:
            previous.cancel()

    def _expire(self) -> None:
        with self._lock:
            if self._state.cancelled:
                return
            self._state.expired = True
        self.cancel(TIMEOUT_REASON)

    def dispose(self) -> None:
        """Disarm any deadline and detach from the parent token."""
        with self._lock:
            deadline, self._state.deadline = self._state.deadline, None
            self._callbacks.clear()
        if deadline is not None:
            deadline.cancel()
        if self._parent is not None:
            self._parent.unlink_child(self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def with_timeout(self, seconds: float) -> "CancellationToken":
        """Child token that also cancels itself after ``seconds`` (needs a running loop)."""
        token = self.child()
        token.cancel_after(seconds)
        return token

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken", "TIMEOUT_REASON"]
