"""Anthropic Messages API adapter.

Purpose:
- Map ``ChatParams`` onto ``POST /v1/messages`` with ``x-api-key`` auth.
- Conversational-only turn model: system text travels in the top-level
  ``system`` field, turns strictly alternate (see ``format_alternating_turns``).

Vendor quirks:
- ``max_tokens`` is mandatory (default 8192); temperature is clamped to [0, 1].
- Built-in tools and prompt caching are opt-in betas; a 4xx that names one of
  them is retried once with tools, betas and caching removed.

Timeout & cancellation:
- Same contract as every adapter (see ``base.session``).
"""

from __future__ import annotations

from typing import AsyncIterator, Optional, Tuple

import httpx

from ..base.capabilities import enabled_tooling_for_provider
from ..base.http.exchange import VendorRequest
from ..base.logging import get_logger
from ..base.models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk
from ..base.session import CallContext, FeatureFallback, execute_json_request, stream_chat_session
from ..base.tools import extract_anthropic_content, to_input_schema_tools
from ..base.utils.messages import format_alternating_turns
from ..base.utils.params import clamp_temperature, resolve_max_tokens
from ..config.defaults import ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_DEFAULT_MAX_TOKENS
from .helpers import (
    RETRY_KEYWORDS,
    build_body,
    build_headers,
    build_tooling,
    first_text_block,
    should_enable_prompt_caching,
    translate_event,
)


class AnthropicProvider:
    """Anthropic adapter (``provider_name == "anthropic"``)."""

    provider_name = "anthropic"
    display_name = "Anthropic"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or ANTHROPIC_DEFAULT_BASE_URL).rstrip("/")
        self._http_client = http_client
        self._logger = get_logger("providers.anthropic")

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/messages"

    def _call(self, model: str, purpose: str) -> CallContext:
        return CallContext(
            provider=self.provider_name,
            vendor=self.display_name,
            model=model,
            logger=self._logger,
            http_client=self._http_client,
            purpose=purpose,
        )

    def build_request(
        self, params: ChatParams, *, stream: bool = False
    ) -> Tuple[VendorRequest, Optional[FeatureFallback]]:
        """Return the request and, when tools or caching were added, its downgrade."""
        tooling = enabled_tooling_for_provider(self.provider_name, params.tooling)
        system, turns = format_alternating_turns(params.messages, params.system_prompt)
        tools = build_tooling(tooling)
        caching = should_enable_prompt_caching(system, turns, tooling)

        def _request(with_features: bool) -> VendorRequest:
            body = build_body(
                params.model,
                system,
                turns,
                max_tokens=resolve_max_tokens(params.max_tokens, ANTHROPIC_DEFAULT_MAX_TOKENS),
                temperature=clamp_temperature(params.temperature, 0.0, 1.0),
                tools=tools if with_features else (),
                stream=stream,
                prompt_caching=caching and with_features,
            )
            headers = build_headers(
                self._api_key,
                code_execution=with_features and tooling.code_execution,
                prompt_caching=caching and with_features,
            )
            return VendorRequest(url=self.endpoint, body=body, headers=headers)

        request = _request(True)
        if not tools and not caching:
            return request, None
        return request, FeatureFallback(downgrade=lambda: _request(False), keywords=RETRY_KEYWORDS)

    async def chat(self, params: ChatParams) -> str:
        request, fallback = self.build_request(params)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return first_text_block(data)

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        system, turns = format_alternating_turns(params.messages, params.system_prompt)

        def _request(tools) -> VendorRequest:
            body = build_body(
                params.model,
                system,
                turns,
                max_tokens=resolve_max_tokens(params.max_tokens, ANTHROPIC_DEFAULT_MAX_TOKENS),
                temperature=clamp_temperature(params.temperature, 0.0, 1.0),
                tools=tools,
            )
            return VendorRequest(url=self.endpoint, body=body, headers=build_headers(self._api_key))

        request = _request(to_input_schema_tools(params.tools))
        fallback = FeatureFallback(downgrade=lambda: _request(()), keywords=RETRY_KEYWORDS)
        data = await execute_json_request(
            self._call(params.model, "chat"), request, cancel_token=params.cancel_token, fallback=fallback
        )
        return extract_anthropic_content(data)

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        request, fallback = self.build_request(params, stream=True)
        return stream_chat_session(
            self._call(params.model, "stream"),
            request,
            translate_event,
            cancel_token=params.cancel_token,
            fallback=fallback,
        )


__all__ = ["AnthropicProvider"]
