"""Groq and LM Studio: OpenAI-compatible bodies with no optional features."""

from __future__ import annotations

import httpx
import pytest

from optimaizer_providers.base.errors import ProviderError
from optimaizer_providers.base.models import ChatParams, ChatWithToolsParams, NativeFunctionTool, StreamChunk, ToolingOptions
from optimaizer_providers.groq import GroqProvider
from optimaizer_providers.lmstudio import LMStudioProvider
from optimaizer_providers.tests.utils import collect, mock_client, request_json, sse, user

OK = {"choices": [{"message": {"content": "fine"}}]}


@pytest.mark.asyncio
async def test_groq_sends_max_tokens_and_ignores_tooling():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK)

    provider = GroqProvider("gsk_test", http_client=mock_client(handler))
    params = ChatParams(model="llama", messages=[user("q")], max_tokens=32, tooling=ToolingOptions(web_search=True))
    assert await provider.chat(params) == "fine"
    assert str(seen[0].url) == "https://api.groq.com/openai/v1/chat/completions"
    assert seen[0].headers["authorization"] == "Bearer gsk_test"
    body = request_json(seen[0])
    assert body["max_tokens"] == 32
    assert "tools" not in body and "max_completion_tokens" not in body


@pytest.mark.asyncio
async def test_groq_tools_call_surfaces_errors_without_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400, text="tool use failed")

    provider = GroqProvider("gsk_test", http_client=mock_client(handler))
    params = ChatWithToolsParams(
        model="llama", messages=[user("q")], tools=[NativeFunctionTool(name="f", description="d")]
    )
    with pytest.raises(ProviderError) as info:
        await provider.chat_with_tools(params)
    assert len(calls) == 1
    assert str(info.value) == "Groq API error (400): tool use failed"


@pytest.mark.asyncio
async def test_groq_stream_default_error():
    provider = GroqProvider(
        "gsk_test", http_client=mock_client(lambda r: httpx.Response(200, content=sse({"error": {"type": "x"}})))
    )
    chunks = await collect(provider.chat_stream(ChatParams(model="llama", messages=[user("q")])))
    assert chunks == [StreamChunk.failure("Groq stream error")]


@pytest.mark.asyncio
async def test_lmstudio_endpoint_without_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=sse({"choices": [{"delta": {"content": "x"}}]}))

    provider = LMStudioProvider("http://gpu-box:1234/", http_client=mock_client(handler))
    chunks = await collect(provider.chat_stream(ChatParams(model="local", messages=[user("q")], temperature=0.2)))
    assert chunks == [StreamChunk.token("x"), StreamChunk.done()]
    assert str(seen[0].url) == "http://gpu-box:1234/v1/chat/completions"
    assert "authorization" not in seen[0].headers
    assert request_json(seen[0])["temperature"] == 0.2
