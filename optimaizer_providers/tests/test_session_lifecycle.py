"""Shared call lifecycle: deadlines, caller aborts, log events."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from optimaizer_providers.base.cancellation import CancellationToken, CancelledError
from optimaizer_providers.base.errors import ErrorCode, ProviderError
from optimaizer_providers.base.models import ChatParams, StreamChunk
from optimaizer_providers.groq import GroqProvider
from optimaizer_providers.openai import OpenAIProvider
from optimaizer_providers.tests.utils import collect, mock_client, sse, user


def _slow_handler(delay: float):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delay)
        return httpx.Response(200, content=sse({"choices": [{"delta": {"content": "late"}}]}))

    return handler


@pytest.mark.asyncio
async def test_chat_deadline_raises_timeout(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_REQUEST_SECONDS", "0.05")
    provider = GroqProvider("gsk_test", http_client=mock_client(_slow_handler(5)))
    with pytest.raises(ProviderError) as info:
        await provider.chat(ChatParams(model="m", messages=[user("q")]))
    assert info.value.code is ErrorCode.TIMEOUT
    assert str(info.value) == "Groq request timed out after 0.05s"


@pytest.mark.asyncio
async def test_stream_deadline_yields_error_chunk(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_REQUEST_SECONDS", "0.05")
    provider = GroqProvider("gsk_test", http_client=mock_client(_slow_handler(5)))
    chunks = await collect(provider.chat_stream(ChatParams(model="m", messages=[user("q")])))
    assert chunks == [StreamChunk.failure("Groq request timed out after 0.05s")]


@pytest.mark.asyncio
async def test_caller_abort_during_chat_raises_cancelled(provider_events):
    token = CancellationToken()
    asyncio.get_running_loop().call_later(0.02, token.cancel, "user")
    provider = GroqProvider("gsk_test", http_client=mock_client(_slow_handler(5)))
    with pytest.raises(CancelledError):
        await provider.chat(ChatParams(model="m", messages=[user("q")], cancel_token=token))
    (event,) = provider_events.named("chat.cancelled")
    assert event["error_code"] == "cancelled"


@pytest.mark.asyncio
async def test_caller_abort_before_stream_yields_nothing(provider_events):
    token = CancellationToken()
    token.cancel("user")
    provider = GroqProvider("gsk_test", http_client=mock_client(_slow_handler(0)))
    chunks = await collect(provider.chat_stream(ChatParams(model="m", messages=[user("q")], cancel_token=token)))
    assert chunks == []
    (event,) = provider_events.named("stream.cancelled")
    assert event["error_code"] == "cancelled"


@pytest.mark.asyncio
async def test_successful_chat_logs_start_and_end(provider_events):
    provider = GroqProvider(
        "gsk_test", http_client=mock_client(lambda r: httpx.Response(200, json={"choices": [{"message": {"content": "x"}}]}))
    )
    assert await provider.chat(ChatParams(model="m", messages=[user("q")])) == "x"
    (start,) = provider_events.named("chat.start")
    (end,) = provider_events.named("chat.end")
    assert start["provider"] == "groq" and start["model"] == "m"
    assert end["emitted"] is True
    assert "latency_ms" in end
    assert "gsk_test" not in str(provider_events.events)


@pytest.mark.asyncio
async def test_stream_start_and_end_events(provider_events):
    provider = GroqProvider("gsk_test", http_client=mock_client(_slow_handler(0)))
    chunks = await collect(provider.chat_stream(ChatParams(model="m", messages=[user("q")])))
    assert chunks == [StreamChunk.token("late"), StreamChunk.done()]
    assert provider_events.named("stream.start")
    (end,) = provider_events.named("stream.end")
    assert end["outcome"] == "done"
    assert end["tokens"] == {"chunks": 1}


class _StallingBody(httpx.AsyncByteStream):
    """Sends ``first`` and then never finishes."""

    def __init__(self, first: bytes) -> None:
        self.first = first
        self.closed = False

    async def __aiter__(self):
        yield self.first
        await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_caller_deadline_mid_stream_is_a_silent_abort(provider_events):
    body = _StallingBody(sse({"choices": [{"delta": {"content": "A"}}]}, done=False))
    provider = OpenAIProvider("sk-test", http_client=mock_client(lambda r: httpx.Response(200, stream=body)))
    token = CancellationToken().with_timeout(0.1)
    chunks = await collect(provider.chat_stream(ChatParams(model="m", messages=[user("q")], cancel_token=token)))
    assert chunks == [StreamChunk.token("A")]
    assert body.closed
    (end,) = provider_events.named("stream.end")
    assert end["outcome"] == "cancelled"


@pytest.mark.asyncio
async def test_caller_deadline_during_chat_raises_cancelled():
    token = CancellationToken().with_timeout(0.05)
    provider = GroqProvider("gsk_test", http_client=mock_client(_slow_handler(5)))
    with pytest.raises(CancelledError):
        await provider.chat(ChatParams(model="m", messages=[user("q")], cancel_token=token))
