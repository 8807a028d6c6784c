"""LM Studio local runtime adapter.

LM Studio serves an OpenAI-compatible API on a caller-configured base URL
(``LMSTUDIO_BASE_URL``, default ``http://127.0.0.1:1234``) without
authentication. Same body as Groq: ``max_tokens`` limit, no built-in tooling,
no downgrade retry.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional

import httpx

from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk
from ..base.openai_style import base_chat_body, delta_translator, first_choice_message, first_choice_text
from ..base.session import CallContext, execute_json_request, stream_chat_session
from ..base.tools import function_message_result, to_function_tools
from ..config.defaults import LMSTUDIO_DEFAULT_BASE_URL


class LMStudioProvider:
    """LM Studio adapter (``provider_name == "lmstudio"``)."""

    provider_name = "lmstudio"
    display_name = "LM Studio"

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = (base_url or LMSTUDIO_DEFAULT_BASE_URL).rstrip("/")
        self._http_client = http_client
        self._logger = get_logger("providers.lmstudio")

    @property
    def base_url(self) -> str:
        return self._base_url

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
        return VendorRequest(url=f"{self._base_url}/v1/chat/completions", body=body)

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
            delta_translator("LM Studio stream error"),
            cancel_token=params.cancel_token,
        )


__all__ = ["LMStudioProvider"]
