"""Google Gemini ``generateContent`` adapter.

Purpose:
- Map ``ChatParams`` onto ``POST /v1beta/models/{model}:generateContent``
  (streaming: ``:streamGenerateContent?alt=sse``) with ``x-goog-api-key``.
- ``model`` role turn model: assistant turns become ``model``, system text
  travels in ``systemInstruction``.

Vendor quirks:
- Sampling settings live under ``generationConfig``.
- Function tools need the typed schema dialect (``to_gemini_schema``).
- Errors are labelled ``Google`` while the display name is ``Google Gemini``.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple

import httpx

from ..base.capabilities import enabled_tooling_for_provider
from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk, ToolingOptions
from ..base.session import CallContext, FeatureFallback, execute_json_request, stream_chat_session
from ..base.tools import extract_gemini_content, gemini_parts, to_gemini_function_declarations
from ..base.utils.messages import format_model_role_contents, resolve_system_instruction
from ..base.utils.params import resolve_max_tokens, resolve_temperature
from ..config.defaults import DEFAULT_TEMPERATURE, GEMINI_DEFAULT_BASE_URL

RETRY_KEYWORDS = ("tool", "google_search", "code_execution", "unsupported")
ERROR_LABEL = "Google"


def build_tooling(tooling: ToolingOptions) -> List[Dict[str, Any]]:
    tools: List[Dict[str, Any]] = []
    if tooling.web_search:
        tools.append({"google_search": {}})
    if tooling.code_execution:
        tools.append({"code_execution": {}})
    return tools


def first_part_text(data: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or ``""``."""
    parts = gemini_parts(data)
    if not parts or not isinstance(parts[0], Mapping):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def translate_event(payload: Mapping[str, Any]) -> Optional[StreamChunk]:
    error = payload.get("error")
    if error:
        message = error.get("message") if isinstance(error, Mapping) else None
        return StreamChunk.failure(message if isinstance(message, str) and message else "Google stream error")
    text = first_part_text(payload)
    return StreamChunk.token(text) if text else None


class GeminiProvider:
    """Gemini adapter (``provider_name == "google"``)."""

    provider_name = "google"
    display_name = "Google Gemini"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or GEMINI_DEFAULT_BASE_URL).rstrip("/")
        self._http_client = http_client
        self._logger = get_logger("providers.gemini")

    def _call(self, model: str, purpose: str) -> CallContext:
        return CallContext(
            provider=self.provider_name,
            vendor=ERROR_LABEL,
            model=model,
            logger=self._logger,
            http_client=self._http_client,
            purpose=purpose,
        )

    def _body(self, params: ChatParams) -> Dict[str, Any]:
        generation: Dict[str, Any] = {"temperature": resolve_temperature(params.temperature, DEFAULT_TEMPERATURE)}
        max_tokens = resolve_max_tokens(params.max_tokens)
        if max_tokens is not None:
            generation["maxOutputTokens"] = max_tokens
        body: Dict[str, Any] = {
            "contents": format_model_role_contents(params.messages),
            "generationConfig": generation,
        }
        instruction = resolve_system_instruction(params.messages, params.system_prompt)
        if instruction:
            body["systemInstruction"] = instruction
        return body

    def _request(self, model: str, body: Dict[str, Any], *, stream: bool = False) -> VendorRequest:
        action = "streamGenerateContent" if stream else "generateContent"
        return VendorRequest(
            url=f"{self._base_url}/models/{model}:{action}",
            body=body,
            headers={"x-goog-api-key": self._api_key},
            params={"alt": "sse"} if stream else None,
        )

    def build_request(
        self, params: ChatParams, *, stream: bool = False
    ) -> Tuple[VendorRequest, Optional[FeatureFallback]]:
        body = self._body(params)
        tools = build_tooling(enabled_tooling_for_provider(self.provider_name, params.tooling))
        if tools:
            body["tools"] = tools
        request = self._request(params.model, body, stream=stream)
        if not tools:
            return request, None
        return request, FeatureFallback(downgrade=lambda: request.without("tools"), keywords=RETRY_KEYWORDS)

    async def chat(self, params: ChatParams) -> str:
        request, fallback = self.build_request(params)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return first_part_text(data)

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        body = self._body(params)
        declarations = to_gemini_function_declarations(params.tools)
        if declarations:
            body["tools"] = declarations
            body["toolConfig"] = {"functionCallingConfig": {"mode": "AUTO"}}
        request = self._request(params.model, body)
        fallback = None
        if declarations:
            fallback = FeatureFallback(downgrade=lambda: request.without("tools", "toolConfig"), keywords=RETRY_KEYWORDS)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return extract_gemini_content(data)

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        request, fallback = self.build_request(params, stream=True)
        return stream_chat_session(
            self._call(params.model, "stream"),
            request,
            translate_event,
            cancel_token=params.cancel_token,
            fallback=fallback,
        )


__all__ = ["GeminiProvider", "RETRY_KEYWORDS", "build_tooling", "first_part_text", "translate_event"]
