from __future__ import annotations

import asyncio

import pytest

from optimaizer_providers.base.cancellation import (
    TIMEOUT_REASON,
    CancellationToken,
    CancelledError,
    await_cancellable,
    request_scope,
)
from optimaizer_providers.tests.utils import assert_true


def test_cancel_cascades_to_children_and_fires_callbacks():
    parent = CancellationToken()
    child = parent.child()
    seen = []
    child.add_callback(seen.append)
    parent.cancel("user")
    assert_true(child.cancelled, "child should follow parent")
    assert_true(seen == ["user"], f"callback reason mismatch: {seen}")
    with pytest.raises(CancelledError):
        child.raise_if_cancelled()


def test_callback_on_cancelled_token_fires_immediately_and_remover_works():
    token = CancellationToken()
    token.cancel()
    fired = []
    token.add_callback(lambda reason: fired.append(reason))
    assert fired == [None]

    fresh = CancellationToken()
    hits = []
    remove = fresh.add_callback(hits.append)
    remove()
    fresh.cancel("x")
    assert hits == []


def test_child_of_cancelled_parent_starts_cancelled():
    parent = CancellationToken()
    parent.cancel("gone")
    child = CancellationToken(parent=parent)
    assert child.cancelled and child.reason == "gone"


@pytest.mark.asyncio
async def test_cancel_after_marks_timeout():
    token = CancellationToken().with_timeout(0.01)
    await asyncio.sleep(0.05)
    assert token.cancelled
    assert token.timed_out
    assert token.reason == TIMEOUT_REASON


@pytest.mark.asyncio
async def test_request_scope_disposes_deadline():
    parent = CancellationToken()
    with request_scope(parent, 0.01) as token:
        pass
    await asyncio.sleep(0.05)
    assert not token.cancelled
    assert not parent.cancelled


@pytest.mark.asyncio
async def test_await_cancellable_interrupts_pending_await():
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    loop.call_later(0.01, token.cancel, "stop")
    with pytest.raises(CancelledError):
        await await_cancellable(asyncio.sleep(10), token)


@pytest.mark.asyncio
async def test_await_cancellable_returns_value():
    async def value():
        return 7

    assert await await_cancellable(value(), CancellationToken()) == 7
    assert await await_cancellable(value(), None) == 7


@pytest.mark.asyncio
async def test_parent_deadline_does_not_mark_child_timed_out():
    parent = CancellationToken().with_timeout(0.01)
    child = parent.child()
    await asyncio.sleep(0.05)
    assert parent.timed_out is True
    assert child.cancelled is True
    assert child.reason == TIMEOUT_REASON
    assert child.timed_out is False


def test_manual_timeout_reason_is_not_a_deadline():
    token = CancellationToken()
    token.cancel(TIMEOUT_REASON)
    assert token.timed_out is False
