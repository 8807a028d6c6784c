"""``run_event_stream`` terminal-chunk and resource-release guarantees."""

from __future__ import annotations

import asyncio
from typing import Any, List, Mapping, Optional

import httpx
import pytest

from optimaizer_providers.base.cancellation import CancellationToken
from optimaizer_providers.base.logging import LogContext, get_logger
from optimaizer_providers.base.models import StreamChunk
from optimaizer_providers.base.streaming import run_event_stream
from optimaizer_providers.tests.utils import collect, ndjson, sse


def _delta(payload: Mapping[str, Any]) -> Optional[StreamChunk]:
    text = payload.get("t")
    return StreamChunk.token(text) if text else None


class _ChunkedStream(httpx.AsyncByteStream):
    """Body that yields ``parts`` then optionally blocks forever; records aclose."""

    def __init__(self, parts: List[bytes], *, hang: bool = False) -> None:
        self.parts = parts
        self.hang = hang
        self.closed = False

    async def __aiter__(self):
        for part in self.parts:
            yield part
        if self.hang:
            await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.closed = True


def _response(stream: httpx.AsyncByteStream) -> httpx.Response:
    return httpx.Response(200, stream=stream)


@pytest.mark.asyncio
async def test_sse_tokens_then_sentinel():
    body = _ChunkedStream([sse({"t": "A"}, {"t": "B"})])
    chunks = await collect(run_event_stream(_response(body), _delta))
    assert chunks == [StreamChunk.token("A"), StreamChunk.token("B"), StreamChunk.done()]
    assert body.closed


@pytest.mark.asyncio
async def test_early_close_gets_exactly_one_synthetic_done():
    body = _ChunkedStream([b'data: {"t": "A"}\n', b"data: {garbage\n"])
    chunks = await collect(run_event_stream(_response(body), _delta))
    assert chunks == [StreamChunk.token("A"), StreamChunk.done()]


@pytest.mark.asyncio
async def test_frames_split_across_reads_are_reassembled():
    raw = sse({"t": "hello"}, {"t": "world"})
    body = _ChunkedStream([raw[i : i + 5] for i in range(0, len(raw), 5)])
    chunks = await collect(run_event_stream(_response(body), _delta))
    assert [c.content for c in chunks if c.type == "token"] == ["hello", "world"]
    assert chunks[-1].type == "done"


@pytest.mark.asyncio
async def test_nothing_after_first_terminal_chunk():
    def translate(payload):
        if payload.get("fail"):
            return StreamChunk.failure("boom")
        return _delta(payload)

    body = _ChunkedStream([sse({"t": "A"}, {"fail": True}, {"t": "late"})])
    chunks = await collect(run_event_stream(_response(body), translate))
    assert chunks == [StreamChunk.token("A"), StreamChunk.failure("boom")]
    assert body.closed


@pytest.mark.asyncio
async def test_ndjson_tail_without_newline_is_parsed():
    body = _ChunkedStream([ndjson({"t": "A"}) + b'{"t": "B"}'])
    chunks = await collect(run_event_stream(_response(body), _delta, framing="ndjson"))
    assert chunks == [StreamChunk.token("A"), StreamChunk.token("B"), StreamChunk.done()]


@pytest.mark.asyncio
async def test_abort_mid_stream_releases_response_and_stops(provider_events):
    token = CancellationToken()
    body = _ChunkedStream([b'data: {"t": "A"}\n'], hang=True)
    stream = run_event_stream(
        _response(body),
        _delta,
        cancel_token=token,
        logger=get_logger("providers.test"),
        ctx=LogContext(provider="test", model="m"),
    )
    received = []
    async for chunk in stream:
        received.append(chunk)
        token.cancel("user")
    assert received == [StreamChunk.token("A")]
    assert body.closed
    assert provider_events.named("stream.cancelled")
    (end,) = provider_events.named("stream.end")
    assert end["outcome"] == "cancelled"


@pytest.mark.asyncio
async def test_deadline_yields_timeout_error_chunk():
    token = CancellationToken().with_timeout(0.02)
    body = _ChunkedStream([], hang=True)
    chunks = await collect(
        run_event_stream(_response(body), _delta, cancel_token=token, timeout_message="Vendor request timed out")
    )
    assert chunks == [StreamChunk.failure("Vendor request timed out")]
    assert body.closed


@pytest.mark.asyncio
async def test_consumer_aclose_releases_response():
    body = _ChunkedStream([b'data: {"t": "A"}\n'], hang=True)
    stream = run_event_stream(_response(body), _delta)
    first = await stream.__anext__()
    assert first == StreamChunk.token("A")
    await stream.aclose()
    assert body.closed


@pytest.mark.asyncio
async def test_malformed_frames_are_skipped_and_reported(provider_events):
    body = _ChunkedStream([b"data: {oops\n", sse({"t": "A"})])
    chunks = await collect(
        run_event_stream(
            _response(body),
            _delta,
            logger=get_logger("providers.test"),
            ctx=LogContext(provider="test", model="m"),
        )
    )
    assert chunks == [StreamChunk.token("A"), StreamChunk.done()]
    (report,) = provider_events.named("stream.decode_error")
    assert report["skipped_frames"] == 1
    (end,) = provider_events.named("stream.end")
    assert end["outcome"] == "done"


@pytest.mark.asyncio
async def test_translator_may_return_token_and_terminal_together():
    def translate(payload):
        if payload.get("last"):
            return [StreamChunk.token(payload["t"]), StreamChunk.done()]
        return _delta(payload)

    body = _ChunkedStream([ndjson({"t": "A"}, {"t": "B", "last": True}, {"t": "late"})])
    chunks = await collect(run_event_stream(_response(body), translate, framing="ndjson"))
    assert chunks == [StreamChunk.token("A"), StreamChunk.token("B"), StreamChunk.done()]
    assert body.closed
