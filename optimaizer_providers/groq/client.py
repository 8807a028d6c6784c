"""Groq adapter (OpenAI-compatible endpoint).

Groq takes the OpenAI body with a plain ``max_tokens`` limit. It has no
built-in tooling in the capability table, so requests never carry optional
features and there is nothing to downgrade; every failure surfaces directly.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional

import httpx

from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk
from ..base.openai_style import base_chat_body, bearer_headers, delta_translator, first_choice_message, first_choice_text
from ..base.session import CallContext, execute_json_request, stream_chat_session
from ..base.tools import function_message_result, to_function_tools
from ..config.defaults import GROQ_DEFAULT_BASE_URL


class GroqProvider:
    """Groq adapter (``provider_name == "groq"``)."""

    provider_name = "groq"
    display_name = "Groq"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or GROQ_DEFAULT_BASE_URL).rstrip("/")
        self._http_client = http_client
        self._logger = get_logger("providers.groq")

    def _call(self, model: str, purpose: str) -> CallContext:
        return CallContext(
            provider=self.provider_name,
            vendor=self.display_name,
            model=model,
            logger=self._logger,
            http_client=self._http_client,
            purpose=purpose,
        )

    def _request(self, body: dict) -> VendorRequest:
        return VendorRequest(url=f"{self._base_url}/chat/completions", body=body, headers=bearer_headers(self._api_key))

    async def chat(self, params: ChatParams) -> str:
        data = await execute_json_request(
            self._call(params.model, "chat"), self._request(base_chat_body(params)), cancel_token=params.cancel_token
        )
        return first_choice_text(data)

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        body = base_chat_body(params)
        body["tools"] = to_function_tools(params.tools)
        body["tool_choice"] = "auto"
        data = await execute_json_request(
            self._call(params.model, "chat"), self._request(body), cancel_token=params.cancel_token
        )
        return function_message_result(first_choice_message(data))

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        return stream_chat_session(
            self._call(params.model, "stream"),
            self._request(base_chat_body(params, stream=True)),
            delta_translator("Groq stream error"),
            cancel_token=params.cancel_token,
        )


__all__ = ["GroqProvider"]
