"""Shared helpers for provider tests.

Exports:
    - assert_true(condition, message)
    - mock_client(handler): ``httpx.AsyncClient`` over ``httpx.MockTransport``
    - sse(*payloads) / ndjson(*payloads): encode streaming bodies
    - collect(stream): drain an async chunk iterator into a list
    - user(text) / assistant(text) / system(text): message shorthands
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterator, Callable, List

import httpx

from optimaizer_providers.base.models import ChatMessage, StreamChunk


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` if ``condition`` is False."""
    if not condition:
        raise AssertionError(message)


def mock_client(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def sse(*payloads: Any, done: bool = True) -> bytes:
    lines = [f"data: {json.dumps(p)}\n\n" for p in payloads]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def ndjson(*payloads: Any) -> bytes:
    return "".join(json.dumps(p) + "\n" for p in payloads).encode("utf-8")


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


async def collect(stream: AsyncIterator[StreamChunk]) -> List[StreamChunk]:
    return [chunk async for chunk in stream]


def user(text: str) -> ChatMessage:
    return ChatMessage(role="user", content=text)


def assistant(text: str) -> ChatMessage:
    return ChatMessage(role="assistant", content=text)


def system(text: str) -> ChatMessage:
    return ChatMessage(role="system", content=text)
