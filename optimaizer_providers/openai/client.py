"""OpenAI Chat Completions adapter.

Purpose:
- Map ``ChatParams`` onto ``POST /v1/chat/completions`` with bearer auth.
- Built-in tooling: ``web_search_preview`` and ``code_interpreter`` with
  ``tool_choice: auto``, dropped once if the model rejects them.

Vendor quirks:
- The token limit is always sent as ``max_completion_tokens``.
- ``reasoning_effort`` tops out at ``high``; the app-level ``xhigh`` maps to it.

Timeout & cancellation:
- Every call is bounded by ``get_timeout_config().request_timeout_seconds``
  composed with ``params.cancel_token`` (see ``base.session``).
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from ..base.capabilities import enabled_tooling_for_provider
from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk, ToolingOptions
from ..base.openai_style import (
    base_chat_body,
    bearer_headers,
    delta_translator,
    first_choice_message,
    first_choice_text,
)
from ..base.session import CallContext, FeatureFallback, execute_json_request, stream_chat_session
from ..base.tools import function_message_result, to_function_tools
from ..base.utils.params import normalize_reasoning_effort
from ..config.defaults import OPENAI_DEFAULT_BASE_URL

RETRY_KEYWORDS = ("tool", "unsupported", "unknown parameter", "web_search", "code_interpreter")


def build_tooling(tooling: ToolingOptions) -> List[Dict[str, Any]]:
    tools: List[Dict[str, Any]] = []
    if tooling.web_search:
        tools.append({"type": "web_search_preview", "user_location": {"type": "approximate", "country": "US"}})
    if tooling.code_execution:
        tools.append({"type": "code_interpreter", "container": {"type": "auto"}})
    return tools


class OpenAIProvider:
    """OpenAI adapter (``provider_name == "openai"``)."""

    provider_name = "openai"
    display_name = "OpenAI"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or OPENAI_DEFAULT_BASE_URL).rstrip("/")
        self._http_client = http_client
        self._logger = get_logger("providers.openai")

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

    def _body(self, params: ChatParams, *, stream: bool = False) -> Dict[str, Any]:
        body = base_chat_body(params, max_tokens_field="max_completion_tokens", stream=stream)
        effort = normalize_reasoning_effort(params.reasoning_effort)
        if effort:
            body["reasoning_effort"] = effort
        return body

    def build_request(self, params: ChatParams, *, stream: bool = False) -> tuple[VendorRequest, Optional[FeatureFallback]]:
        """Return the request and, when built-in tools were added, its downgrade."""
        body = self._body(params, stream=stream)
        tools = build_tooling(enabled_tooling_for_provider(self.provider_name, params.tooling))
        if tools:
            body["tools"] = tools
            body["tool_choice"] = "auto"
        request = VendorRequest(url=self.endpoint, body=body, headers=bearer_headers(self._api_key))
        if not tools:
            return request, None
        return request, FeatureFallback(
            downgrade=lambda: request.without("tools", "tool_choice"),
            keywords=RETRY_KEYWORDS,
        )

    async def chat(self, params: ChatParams) -> str:
        request, fallback = self.build_request(params)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return first_choice_text(data)

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        body = self._body(params)
        body["tools"] = to_function_tools(params.tools)
        body["tool_choice"] = "auto"
        request = VendorRequest(url=self.endpoint, body=body, headers=bearer_headers(self._api_key))
        fallback = FeatureFallback(downgrade=lambda: request.without("tools", "tool_choice"), keywords=RETRY_KEYWORDS)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return function_message_result(first_choice_message(data))

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        request, fallback = self.build_request(params, stream=True)
        return stream_chat_session(
            self._call(params.model, "stream"),
            request,
            delta_translator("OpenAI stream error"),
            cancel_token=params.cancel_token,
            fallback=fallback,
        )


__all__ = ["OpenAIProvider", "RETRY_KEYWORDS", "build_tooling"]
