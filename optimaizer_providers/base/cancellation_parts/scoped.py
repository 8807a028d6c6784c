"""Async helpers composing a caller token with a request deadline.

``request_scope`` yields a child token that fires either when the caller
cancels or when the fixed request timeout elapses; ``await_cancellable`` races
an awaitable against a token so a pending socket read is interrupted instead
of polled.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Awaitable, Iterator, Optional, TypeVar

from .cancellation_token import CancellationToken
from .cancelled_error import CancelledError

T = TypeVar("T")


@contextmanager
def request_scope(parent: Optional[CancellationToken], timeout_seconds: float) -> Iterator[CancellationToken]:
    """Yield a token bound to ``parent`` and armed with ``timeout_seconds``.

    The token is disposed on exit so the parent does not accumulate children
    across calls.
    """
    token = CancellationToken(parent=parent)
    token.cancel_after(timeout_seconds)
    try:
        yield token
    finally:
        token.dispose()


async def await_cancellable(aw: Awaitable[T], token: Optional[CancellationToken]) -> T:
    """Await ``aw`` unless ``token`` fires first.

    Raises:
        CancelledError: the token was cancelled before ``aw`` completed; the
            underlying task is cancelled so its resources are released.
    """
    if token is None:
        return await aw
    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(aw)
    remove = token.add_callback(lambda _reason: loop.call_soon_threadsafe(task.cancel))
    try:
        return await task
    except asyncio.CancelledError:
        if token.cancelled:
            raise CancelledError(token.reason or "operation cancelled") from None
        raise
    finally:
        remove()


__all__ = ["request_scope", "await_cancellable"]
