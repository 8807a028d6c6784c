"""Model catalog over mocked listing endpoints.

Covers:
- Live listings are normalized (dedupe by id, sort by name, vendor inference).
- Missing keys, HTTP failures, timeouts and empty lists fall back with a
  readable error and never raise.
- Answers are cached; ``force_refresh`` queries again.
- Vendor specifics: Gemini method filtering, OpenRouter key validation,
  local runtimes without credentials.
"""
from __future__ import annotations

from typing import List

import httpx
import pytest

from optimaizer_providers.base.catalog import (
    EMPTY_LIST_MESSAGE,
    NO_API_KEY_MESSAGE,
    get_provider_models_catalog,
)
from optimaizer_providers.base.factory import UnknownProviderError
from optimaizer_providers.base.http.client import close_all_clients, set_transport_override
from optimaizer_providers.tests.utils import mock_client


def _recording(seen: List[httpx.Request], response: httpx.Response):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return handler


@pytest.mark.asyncio
async def test_openai_live_listing_is_normalized():
    seen: List[httpx.Request] = []
    body = {
        "data": [
            {"id": "gpt-b", "owned_by": "openai"},
            {"id": "gpt-a", "owned_by": "system"},
            {"id": "gpt-b", "owned_by": "duplicate"},
            {"owned_by": "no-id"},
        ]
    }
    client = mock_client(_recording(seen, httpx.Response(200, json=body)))
    result = await get_provider_models_catalog("openai", api_key="sk-test", http_client=client)

    (request,) = seen
    assert str(request.url) == "https://api.openai.com/v1/models"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert result.source == "live"
    assert result.configured and result.requires_api_key
    assert [(m.id, m.vendor) for m in result.models] == [("gpt-a", "system"), ("gpt-b", "openai")]
    assert result.models[0].name == "gpt-a"
    assert "error" not in result.to_dict()


@pytest.mark.asyncio
async def test_missing_key_serves_fallback_without_request():
    seen: List[httpx.Request] = []
    client = mock_client(_recording(seen, httpx.Response(200, json={"data": []})))
    result = await get_provider_models_catalog("anthropic", http_client=client)

    assert seen == []
    assert result.source == "fallback"
    assert result.error == NO_API_KEY_MESSAGE
    assert not result.configured
    assert [m.id for m in result.models] == ["claude-haiku-4-5", "claude-opus-4-6", "claude-sonnet-4-5"]
    assert all(m.vendor == "anthropic" for m in result.models)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,message",
    [
        (401, "Groq rejected the credentials (HTTP 401). Check API key and permissions."),
        (403, "Groq rejected the credentials (HTTP 403). Check API key and permissions."),
        (429, "Groq rate limit reached while loading models (HTTP 429). Using fallback list."),
        (500, "HTTP 500: boom"),
    ],
)
async def test_http_failures_fall_back_with_readable_error(status, message):
    client = mock_client(lambda request: httpx.Response(status, text="boom"))
    result = await get_provider_models_catalog("groq", api_key="gsk_test", http_client=client)
    assert result.source == "fallback"
    assert result.error == message
    assert "qwen/qwen3-32b" in [m.id for m in result.models]
    assert {m.id: m.vendor for m in result.models}["qwen/qwen3-32b"] == "qwen"


@pytest.mark.asyncio
async def test_timeout_and_network_errors_are_described():
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    def down(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    timed_out = await get_provider_models_catalog("openai", api_key="sk-test", http_client=mock_client(slow))
    assert timed_out.error == "OpenAI models request timed out. Using fallback list."
    assert [m.id for m in timed_out.models] == ["gpt-5.2"]

    offline = await get_provider_models_catalog("ollama", http_client=mock_client(down))
    assert offline.error == "Network error while contacting Ollama models API. Using fallback list."
    assert offline.models == []
    assert offline.configured and not offline.requires_api_key


@pytest.mark.asyncio
async def test_empty_live_list_uses_fallback():
    client = mock_client(lambda request: httpx.Response(200, json={"data": []}))
    result = await get_provider_models_catalog("openai", api_key="sk-test", http_client=client)
    assert result.source == "fallback"
    assert result.error == EMPTY_LIST_MESSAGE
    assert result.models[0].name == "GPT-5.2"


@pytest.mark.asyncio
async def test_answers_are_cached_until_forced():
    seen: List[httpx.Request] = []
    client = mock_client(_recording(seen, httpx.Response(200, json={"data": [{"id": "m1"}]})))

    first = await get_provider_models_catalog("lmstudio", http_client=client)
    second = await get_provider_models_catalog("lmstudio", http_client=client)
    assert second is first
    assert len(seen) == 1

    refreshed = await get_provider_models_catalog("lmstudio", force_refresh=True, http_client=client)
    assert len(seen) == 2
    assert refreshed is not first
    assert str(seen[0].url) == "http://127.0.0.1:1234/v1/models"
    assert refreshed.models[0].vendor == "local"


@pytest.mark.asyncio
async def test_gemini_keeps_chat_models_and_strips_prefix():
    seen: List[httpx.Request] = []
    body = {
        "models": [
            {
                "name": "models/gemini-2.5-pro",
                "displayName": "Gemini 2.5 Pro",
                "description": "Thinking model",
                "inputTokenLimit": 1048576.9,
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {"name": "models/text-embedding-004", "supportedGenerationMethods": ["embedContent"]},
            {"name": "models/gemini-live", "supportedGenerationMethods": ["streamGenerateContent"]},
        ]
    }
    client = mock_client(_recording(seen, httpx.Response(200, json=body)))
    result = await get_provider_models_catalog("google", api_key="AIza-test", http_client=client)

    assert seen[0].headers["x-goog-api-key"] == "AIza-test"
    assert [m.id for m in result.models] == ["gemini-2.5-pro", "gemini-live"]
    pro = result.models[0]
    assert (pro.name, pro.description, pro.context_length, pro.vendor) == (
        "Gemini 2.5 Pro",
        "Thinking model",
        1048576,
        "google",
    )


@pytest.mark.asyncio
async def test_openrouter_rejects_foreign_key_before_request():
    seen: List[httpx.Request] = []
    client = mock_client(_recording(seen, httpx.Response(200, json={"data": []})))
    result = await get_provider_models_catalog("openrouter", api_key="gsk_abcdefghijklmnop", http_client=client)
    assert seen == []
    assert result.source == "fallback"
    assert result.error.startswith("Configured OpenRouter key looks like a Groq API key (gsk_...).")
    assert len(result.models) == 18


@pytest.mark.asyncio
async def test_openrouter_listing_headers_and_vendor():
    seen: List[httpx.Request] = []
    body = {
        "data": [
            {
                "id": "mistralai/mistral-nemo",
                "name": "Mistral Nemo",
                "context_length": 131072,
                "pricing": {"prompt": "0.00000002"},
            }
        ]
    }
    client = mock_client(_recording(seen, httpx.Response(200, json=body)))
    result = await get_provider_models_catalog(
        "openrouter", api_key="sk-or-v1-abcdefghijklmnop", http_client=client
    )
    (request,) = seen
    assert request.headers["HTTP-Referer"] == "https://optimaizer.app"
    assert request.headers["X-Title"] == "optimAIzer"
    (model,) = result.models
    assert model.vendor == "mistralai"
    assert model.context_length == 131072
    assert "pricing" not in model.to_dict()


@pytest.mark.asyncio
async def test_ollama_tags_listing():
    seen: List[httpx.Request] = []
    body = {"models": [{"name": "llama3:latest", "model": "llama3:latest"}, {"name": "qwen3:8b"}]}
    client = mock_client(_recording(seen, httpx.Response(200, json=body)))
    result = await get_provider_models_catalog("ollama", base_url="http://gpu-box:11434/", http_client=client)
    assert str(seen[0].url) == "http://gpu-box:11434/api/tags"
    assert [m.id for m in result.models] == ["llama3:latest", "qwen3:8b"]
    assert {m.vendor for m in result.models} == {"ollama"}


@pytest.mark.asyncio
async def test_fetch_outcome_is_logged(provider_events):
    client = mock_client(lambda request: httpx.Response(429, text="slow down"))
    await get_provider_models_catalog("openai", api_key="sk-test", http_client=client)
    (event,) = provider_events.named("models.fetch")
    assert event["provider"] == "openai"
    assert event["source"] == "fallback"
    assert event["error_code"] == "rate_limit"
    assert event["emitted"] is False


@pytest.mark.asyncio
async def test_pooled_client_used_when_none_injected():
    seen: List[httpx.Request] = []
    set_transport_override(httpx.MockTransport(_recording(seen, httpx.Response(200, json={"data": [{"id": "m"}]}))))
    try:
        result = await get_provider_models_catalog("groq", api_key="gsk_test")
    finally:
        await close_all_clients()
        set_transport_override(None)
    assert len(seen) == 1
    assert result.source == "live"


@pytest.mark.asyncio
async def test_unknown_provider_raises():
    with pytest.raises(UnknownProviderError):
        await get_provider_models_catalog("nope")
