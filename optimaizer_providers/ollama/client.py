"""Ollama local runtime adapter.

Purpose:
- Map ``ChatParams`` onto ``POST {base_url}/api/chat`` (no auth).
- Streams are newline-delimited JSON objects rather than prefixed events.

Vendor quirks:
- Sampling settings live under ``options`` (``num_predict``, ``temperature``
  clamped to [0, 2]); the block is omitted when empty.
- ``stream`` must be sent explicitly; Ollama streams by default.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

import httpx

from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk
from ..base.session import CallContext, execute_json_request, stream_chat_session
from ..base.tools import function_message_result, to_function_tools
from ..base.utils.messages import build_messages_with_system
from ..base.utils.params import clamp_temperature, resolve_max_tokens
from ..config.defaults import OLLAMA_DEFAULT_BASE_URL


def build_body(params: ChatParams, *, stream: bool = False) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": params.model,
        "messages": build_messages_with_system(params.messages, params.system_prompt),
        "stream": stream,
    }
    options: Dict[str, Any] = {}
    max_tokens = resolve_max_tokens(params.max_tokens)
    if max_tokens is not None:
        options["num_predict"] = max_tokens
    temperature = clamp_temperature(params.temperature, 0.0, 2.0)
    if temperature is not None:
        options["temperature"] = temperature
    if options:
        body["options"] = options
    return body


def message_content(data: Any) -> Optional[str]:
    message = data.get("message") if isinstance(data, Mapping) else None
    content = message.get("content") if isinstance(message, Mapping) else None
    return content if isinstance(content, str) else None


def translate_line(payload: Mapping[str, Any]) -> List[StreamChunk]:
    """Token first, then ``done`` or ``error``; the final object may carry both."""
    chunks: List[StreamChunk] = []
    content = message_content(payload)
    if content:
        chunks.append(StreamChunk.token(content))
    if payload.get("done") is True:
        chunks.append(StreamChunk.done())
    elif payload.get("error"):
        chunks.append(StreamChunk.failure(str(payload["error"])))
    return chunks


class OllamaProvider:
    """Ollama adapter (``provider_name == "ollama"``)."""

    provider_name = "ollama"
    display_name = "Ollama"

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = (base_url or OLLAMA_DEFAULT_BASE_URL).rstrip("/")
        self._http_client = http_client
        self._logger = get_logger("providers.ollama")

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

    def _request(self, body: Dict[str, Any]) -> VendorRequest:
        return VendorRequest(url=f"{self._base_url}/api/chat", body=body)

    async def chat(self, params: ChatParams) -> str:
        data = await execute_json_request(
            self._call(params.model, "chat"), self._request(build_body(params)), cancel_token=params.cancel_token
        )
        return message_content(data) or ""

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        body = build_body(params)
        body["tools"] = to_function_tools(params.tools)
        data = await execute_json_request(
            self._call(params.model, "chat"), self._request(body), cancel_token=params.cancel_token
        )
        message = data.get("message") if isinstance(data, Mapping) else None
        return function_message_result(message)

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        return stream_chat_session(
            self._call(params.model, "stream"),
            self._request(build_body(params, stream=True)),
            translate_line,
            framing="ndjson",
            cancel_token=params.cancel_token,
        )


__all__ = ["OllamaProvider", "build_body", "translate_line"]
