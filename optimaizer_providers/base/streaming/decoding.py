"""Incremental stream decoding: bytes -> lines -> events -> ``StreamChunk``.

Purpose
-------
Turn a vendor's streaming HTTP body into the uniform chunk sequence. Two
framing families are supported:

``sse``
    Prefixed-event framing. Lines without the ``data: `` prefix are ignored,
    a ``[DONE]`` payload ends the stream, anything else is parsed as JSON.
``ndjson``
    Newline-delimited objects. Every non-blank line is one JSON object.

Malformed JSON is skipped (vendors occasionally split or garble a frame).

State machine
-------------
reading -> buffering -> dispatch -> terminal. ``run_event_stream`` pulls one
network read at a time, holds the trailing partial line in ``LineBuffer``,
hands each complete event to a vendor translator and stops after the first
terminal chunk. When the body ends without one, a synthetic ``done`` is
emitted, so every stream ends with exactly one terminal chunk.

Cancellation
------------
Each read races the cancellation token. A caller abort ends the generator
without further chunks (``stream.cancelled`` is logged); a fired request
deadline yields one ``error`` chunk. The response is closed on every exit
path, including consumer ``aclose()``.
"""
from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Callable, List, Literal, Optional, Sequence, Union

import httpx

from ..cancellation import CancellationToken, CancelledError, await_cancellable
from ..errors import ErrorCode
from ..logging import LogContext, normalized_log_event
from ..models import StreamChunk

Framing = Literal["sse", "ndjson"]
Translator = Callable[[Any], Union[StreamChunk, Sequence[StreamChunk], None]]

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"
NO_RESPONSE_BODY = "No response body"


class LineBuffer:
    """Incremental UTF-8 line splitter.

    ``feed`` returns complete lines and keeps the final fragment; multi-byte
    characters split across reads are reassembled by the incremental decoder.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    def feed(self, data: bytes) -> List[str]:
        text = self._pending + self._decoder.decode(data)
        lines = text.split("\n")
        self._pending = lines.pop()
        return lines

    def flush(self) -> str:
        """Return (and clear) whatever remains after the last newline."""
        rest = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return rest


class LineKind(str, Enum):
    IGNORED = "ignored"
    SENTINEL = "sentinel"
    PAYLOAD = "payload"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ParsedLine:
    kind: LineKind
    payload: Any = None


_IGNORED = ParsedLine(LineKind.IGNORED)
_SENTINEL = ParsedLine(LineKind.SENTINEL)
_MALFORMED = ParsedLine(LineKind.MALFORMED)


def _parse_json_object(text: str) -> ParsedLine:
    try:
        payload = json.loads(text)
    except ValueError:
        return _MALFORMED
    if not isinstance(payload, dict):
        return _IGNORED
    return ParsedLine(LineKind.PAYLOAD, payload)


def parse_event_line(line: str, prefix: str = DATA_PREFIX, sentinel: str = DONE_SENTINEL) -> ParsedLine:
    """Classify one prefixed-event line."""
    trimmed = line.strip()
    if not trimmed.startswith(prefix):
        return _IGNORED
    data = trimmed[len(prefix):]
    if data == sentinel:
        return _SENTINEL
    return _parse_json_object(data)


def parse_ndjson_line(line: str) -> ParsedLine:
    """Classify one newline-delimited JSON line (blank lines are ignored)."""
    trimmed = line.strip()
    if not trimmed:
        return _IGNORED
    return _parse_json_object(trimmed)


def _dispatch(parsed: ParsedLine, translate: Translator) -> Sequence[StreamChunk]:
    if parsed.kind is LineKind.SENTINEL:
        return (StreamChunk.done(),)
    if parsed.kind is not LineKind.PAYLOAD:
        return ()
    result = translate(parsed.payload)
    if result is None:
        return ()
    if isinstance(result, StreamChunk):
        return (result,)
    return tuple(result)


async def run_event_stream(  # noqa: PLR0913
    response: httpx.Response,
    translate: Translator,
    *,
    framing: Framing = "sse",
    cancel_token: Optional[CancellationToken] = None,
    timeout_message: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> AsyncIterator[StreamChunk]:
    """Decode ``response`` into chunks ending with exactly one terminal chunk.

    ``translate`` maps one decoded JSON object to ``None``, a chunk, or a
    sequence of chunks (a vendor line may carry its last token and the end of
    stream together). Only the first terminal chunk is honoured.
    """
    parse = parse_event_line if framing == "sse" else parse_ndjson_line
    buffer = LineBuffer()
    reads = response.aiter_bytes()
    tokens = 0
    skipped = 0
    outcome = "done"

    def _process(line: str) -> Sequence[StreamChunk]:
        nonlocal skipped
        parsed = parse(line)
        if parsed.kind is LineKind.MALFORMED:
            skipped += 1
            return ()
        return _dispatch(parsed, translate)

    try:
        while True:
            try:
                data = await await_cancellable(reads.__anext__(), cancel_token)
            except StopAsyncIteration:
                break
            for line in buffer.feed(data):
                for chunk in _process(line):
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled()
                    yield chunk
                    if chunk.is_terminal:
                        outcome = chunk.type
                        return
                    tokens += 1
        tail = buffer.flush()
        if tail.strip():
            for chunk in _process(tail):
                yield chunk
                if chunk.is_terminal:
                    outcome = chunk.type
                    return
                tokens += 1
        yield StreamChunk.done()
    except CancelledError:
        if cancel_token is not None and cancel_token.timed_out and timeout_message:
            outcome = "timeout"
            yield StreamChunk.failure(timeout_message)
        else:
            outcome = "cancelled"
            if logger is not None:
                normalized_log_event(
                    logger,
                    "stream.cancelled",
                    ctx,
                    phase="cancelled",
                    error_code=ErrorCode.CANCELLED.value,
                    emitted=tokens > 0,
                )
    except httpx.HTTPError as exc:
        outcome = "error"
        yield StreamChunk.failure(f"Stream interrupted: {exc}")
    finally:
        await reads.aclose()
        await response.aclose()
        if logger is not None:
            if skipped:
                normalized_log_event(
                    logger, "stream.decode_error", ctx, phase="decode", emitted=tokens > 0, skipped_frames=skipped
                )
            normalized_log_event(
                logger,
                "stream.end",
                ctx,
                phase="finalize",
                emitted=tokens > 0,
                tokens={"chunks": tokens},
                outcome=outcome,
                skipped_frames=skipped or None,
            )


__all__ = [
    "Framing",
    "Translator",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "NO_RESPONSE_BODY",
    "LineBuffer",
    "LineKind",
    "ParsedLine",
    "parse_event_line",
    "parse_ndjson_line",
    "run_event_stream",
]
