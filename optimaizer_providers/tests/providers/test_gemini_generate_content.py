"""Gemini adapter: model-role contents, instruction block, tools."""

from __future__ import annotations

import httpx
import pytest

from optimaizer_providers.base.errors import ProviderError
from optimaizer_providers.base.models import (
    ChatParams,
    ChatWithToolsParams,
    NativeFunctionTool,
    StreamChunk,
    ToolingOptions,
)
from optimaizer_providers.gemini import GeminiProvider
from optimaizer_providers.tests.utils import assistant, collect, mock_client, request_json, sse, system, user


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.mark.asyncio
async def test_chat_request_shape():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_reply("pong"))

    provider = GeminiProvider("AIza-test", http_client=mock_client(handler))
    params = ChatParams(
        model="gemini-2.5-flash",
        messages=[system("be kind"), user("ping"), assistant("pong?"), user("ping!")],
        max_tokens=50,
    )
    assert await provider.chat(params) == "pong"
    (request,) = seen
    assert str(request.url) == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent"
    )
    assert request.headers["x-goog-api-key"] == "AIza-test"
    body = request_json(request)
    assert [c["role"] for c in body["contents"]] == ["user", "model", "user"]
    assert body["systemInstruction"] == {"parts": [{"text": "be kind"}]}
    assert body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 50}
    assert "tools" not in body


@pytest.mark.asyncio
async def test_builtin_tools_dropped_after_rejection():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request_json(request))
        if len(bodies) == 1:
            return httpx.Response(400, text="google_search is unsupported for this model")
        return httpx.Response(200, json=_reply("ok"))

    provider = GeminiProvider("AIza-test", http_client=mock_client(handler))
    params = ChatParams(model="g", messages=[user("q")], tooling=ToolingOptions(web_search=True, code_execution=True))
    assert await provider.chat(params) == "ok"
    assert bodies[0]["tools"] == [{"google_search": {}}, {"code_execution": {}}]
    assert "tools" not in bodies[1]


@pytest.mark.asyncio
async def test_errors_use_google_label():
    provider = GeminiProvider("AIza-test", http_client=mock_client(lambda r: httpx.Response(403, text="denied")))
    with pytest.raises(ProviderError) as info:
        await provider.chat(ChatParams(model="g", messages=[user("q")]))
    assert str(info.value) == "Google API error (403): denied"


@pytest.mark.asyncio
async def test_stream_uses_sse_endpoint():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=sse(_reply("Hel"), _reply("lo"), done=False))

    provider = GeminiProvider("AIza-test", http_client=mock_client(handler))
    chunks = await collect(provider.chat_stream(ChatParams(model="g", messages=[user("q")])))
    assert chunks == [StreamChunk.token("Hel"), StreamChunk.token("lo"), StreamChunk.done()]
    assert seen[0].url.path.endswith("/models/g:streamGenerateContent")
    assert seen[0].url.params["alt"] == "sse"


@pytest.mark.asyncio
async def test_stream_inline_error():
    provider = GeminiProvider(
        "AIza-test",
        http_client=mock_client(lambda r: httpx.Response(200, content=sse({"error": {"code": 429}}, done=False))),
    )
    chunks = await collect(provider.chat_stream(ChatParams(model="g", messages=[user("q")])))
    assert chunks == [StreamChunk.failure("Google stream error")]


@pytest.mark.asyncio
async def test_chat_with_tools_declarations_and_extraction():
    bodies = []
    reply = {
        "candidates": [
            {"content": {"parts": [{"functionCall": {"name": "lookup", "args": {"q": "x"}}}, {"text": "done"}]}}
        ]
    }

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request_json(request))
        return httpx.Response(200, json=reply)

    provider = GeminiProvider("AIza-test", http_client=mock_client(handler))
    params = ChatWithToolsParams(
        model="g",
        messages=[user("q")],
        tools=[
            NativeFunctionTool(
                name="lookup",
                description="d",
                parameters={"type": "object", "properties": {"q": {"type": "string"}}, "required": ["q"]},
            )
        ],
    )
    result = await provider.chat_with_tools(params)
    (decl,) = bodies[0]["tools"][0]["functionDeclarations"]
    assert decl["parameters"] == {"type": "OBJECT", "properties": {"q": {"type": "STRING"}}, "required": ["q"]}
    assert bodies[0]["toolConfig"] == {"functionCallingConfig": {"mode": "AUTO"}}
    assert result.content == "done"
    assert [(c.id, c.name, c.arguments) for c in result.tool_calls] == [("function_call_1", "lookup", {"q": "x"})]
