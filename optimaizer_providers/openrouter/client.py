"""OpenRouter adapter (OpenAI-compatible aggregator).

Purpose:
- Map ``ChatParams`` onto ``POST /api/v1/chat/completions`` with bearer auth
  and the ``HTTP-Referer`` / ``X-Title`` attribution headers.

Vendor quirks:
- The API key is normalized and validated before any network call; an
  unusable key fails fast with ``ErrorCode.AUTH`` (or an ``error`` chunk).
- OpenAI reasoning models routed through OpenRouter take
  ``max_completion_tokens``; everything else takes ``max_tokens``.
- Web search is a plugin (``plugins: [{id: web}]``), dropped once on any
  4xx/5xx that mentions it.
- A stream may end with ``finish_reason == "error"`` after useful output;
  that stream is treated as complete.
- ``chat_with_tools`` never downgrades: callers rely on tools being honoured.
"""

from __future__ import annotations

import re
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple

import httpx

from ..base.capabilities import enabled_tooling_for_provider
from ..base.errors import ErrorCode, ProviderError
from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk, ToolingOptions
from ..base.openai_style import (
    base_chat_body,
    bearer_headers,
    delta_content,
    first_choice,
    first_choice_message,
    first_choice_text,
)
from ..base.session import CallContext, FeatureFallback, execute_json_request, stream_chat_session
from ..base.tools import function_message_result, to_function_tools
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_REFERER, OPENROUTER_DEFAULT_TITLE
from .auth import normalize_openrouter_api_key, openrouter_api_key_error

RETRY_KEYWORDS = ("plugin", "web", "unsupported", "clerk", "tool")
STREAM_ERROR = "OpenRouter stream error"
FINISH_ERROR = "OpenRouter stream terminated with finish_reason=error"

_OPENAI_REASONING_MODEL = re.compile(r"openai/o[1-9]")


def uses_max_completion_tokens(model: str) -> bool:
    lowered = model.lower()
    return bool(
        _OPENAI_REASONING_MODEL.search(lowered) or "/o1-" in lowered or "/o3" in lowered or "/o4" in lowered
    )


def build_plugins(tooling: ToolingOptions) -> List[Dict[str, Any]]:
    return [{"id": "web"}] if tooling.web_search else []


def _error_text(error: Any) -> Optional[str]:
    if not isinstance(error, Mapping):
        return None
    message = error.get("message")
    if isinstance(message, str) and message:
        return message
    metadata = error.get("metadata")
    raw = metadata.get("raw") if isinstance(metadata, Mapping) else None
    return raw if isinstance(raw, str) and raw else None


class StreamTranslator:
    """Stateful event translator: remembers whether any token was emitted."""

    def __init__(self) -> None:
        self.emitted_tokens = False

    def __call__(self, payload: Mapping[str, Any]) -> Optional[StreamChunk]:
        if payload.get("error"):
            return StreamChunk.failure(_error_text(payload.get("error")) or STREAM_ERROR)
        choice = first_choice(payload)
        if choice.get("finish_reason") == "error":
            if self.emitted_tokens:
                return StreamChunk.done()
            message = choice.get("message")
            content = message.get("content") if isinstance(message, Mapping) else None
            return StreamChunk.failure(
                _error_text(payload.get("error")) or (content if isinstance(content, str) and content else FINISH_ERROR)
            )
        content = delta_content(payload)
        if not content:
            return None
        self.emitted_tokens = True
        return StreamChunk.token(content)


async def _single_failure(message: str) -> AsyncIterator[StreamChunk]:
    yield StreamChunk.failure(message)


class OpenRouterProvider:
    """OpenRouter adapter (``provider_name == "openrouter"``)."""

    provider_name = "openrouter"
    display_name = "OpenRouter"

    def __init__(  # noqa: PLR0913
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        referer: Optional[str] = None,
        title: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = normalize_openrouter_api_key(api_key)
        self._key_error = openrouter_api_key_error(api_key)
        self._base_url = (base_url or OPENROUTER_DEFAULT_BASE_URL).rstrip("/")
        self._referer = referer or OPENROUTER_DEFAULT_REFERER
        self._title = title or OPENROUTER_DEFAULT_TITLE
        self._http_client = http_client
        self._logger = get_logger("providers.openrouter")

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/chat/completions"

    def _call(self, model: str, purpose: str) -> CallContext:
        return CallContext(
            provider=self.provider_name,
            vendor=self.display_name,
            model=model,
            logger=self._logger,
            http_client=self._http_client,
            purpose=purpose,
        )

    def _ensure_key(self, model: str) -> None:
        if self._key_error:
            raise ProviderError(code=ErrorCode.AUTH, message=self._key_error, provider=self.provider_name, model=model)

    def _headers(self) -> Dict[str, str]:
        return {**bearer_headers(self._api_key), "HTTP-Referer": self._referer, "X-Title": self._title}

    def _body(self, params: ChatParams, *, stream: bool = False) -> Dict[str, Any]:
        limit_field = "max_completion_tokens" if uses_max_completion_tokens(params.model) else "max_tokens"
        return base_chat_body(params, max_tokens_field=limit_field, stream=stream)

    def build_request(
        self, params: ChatParams, *, stream: bool = False
    ) -> Tuple[VendorRequest, Optional[FeatureFallback]]:
        body = self._body(params, stream=stream)
        plugins = build_plugins(enabled_tooling_for_provider(self.provider_name, params.tooling))
        if plugins:
            body["plugins"] = plugins
        request = VendorRequest(url=self.endpoint, body=body, headers=self._headers())
        if not plugins:
            return request, None
        return request, FeatureFallback(
            downgrade=lambda: request.without("plugins"), keywords=RETRY_KEYWORDS, max_status=None
        )

    async def chat(self, params: ChatParams) -> str:
        self._ensure_key(params.model)
        request, fallback = self.build_request(params)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return first_choice_text(data)

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        self._ensure_key(params.model)
        body = self._body(params)
        body["tools"] = to_function_tools(params.tools)
        body["tool_choice"] = "auto"
        request = VendorRequest(url=self.endpoint, body=body, headers=self._headers())
        data = await execute_json_request(self._call(params.model, "chat"), request, cancel_token=params.cancel_token)
        return function_message_result(first_choice_message(data))

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        if self._key_error:
            return _single_failure(self._key_error)
        request, fallback = self.build_request(params, stream=True)
        return stream_chat_session(
            self._call(params.model, "stream"),
            request,
            StreamTranslator(),
            cancel_token=params.cancel_token,
            fallback=fallback,
        )


__all__ = ["OpenRouterProvider", "StreamTranslator", "RETRY_KEYWORDS", "uses_max_completion_tokens", "build_plugins"]
