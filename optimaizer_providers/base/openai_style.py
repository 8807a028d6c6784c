"""Helpers shared by OpenAI-compatible Chat Completions vendors.

Purpose:
- OpenAI, Groq, OpenRouter and LM Studio speak the same request/response
  dialect; Ollama shares the function-tool wrapper. These helpers build the
  common body fields and decode the common response shapes so each adapter
  only states its own quirks (token field name, extra headers, tooling).

Design:
- Composition, not inheritance: adapters call these functions; there is no
  shared base class.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..config.defaults import DEFAULT_TEMPERATURE
from .models import ChatParams, StreamChunk
from .streaming.decoding import Translator
from .utils.messages import build_messages_with_system
from .utils.params import resolve_max_tokens, resolve_temperature


def base_chat_body(
    params: ChatParams,
    *,
    max_tokens_field: Optional[str] = "max_tokens",
    stream: bool = False,
) -> Dict[str, Any]:
    """Return ``model``/``messages``/``temperature`` plus the token limit.

    ``max_tokens_field`` names the vendor's limit key; the key is omitted when
    the requested limit is unusable.
    """
    body: Dict[str, Any] = {
        "model": params.model,
        "messages": build_messages_with_system(params.messages, params.system_prompt),
        "temperature": resolve_temperature(params.temperature, DEFAULT_TEMPERATURE),
    }
    max_tokens = resolve_max_tokens(params.max_tokens)
    if max_tokens is not None and max_tokens_field:
        body[max_tokens_field] = max_tokens
    if stream:
        body["stream"] = True
    return body


def bearer_headers(api_key: Optional[str]) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"} if api_key else {}


def first_choice(data: Any) -> Mapping[str, Any]:
    choices = data.get("choices") if isinstance(data, Mapping) else None
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        return choices[0]
    return {}


def first_choice_message(data: Any) -> Mapping[str, Any]:
    message = first_choice(data).get("message")
    return message if isinstance(message, Mapping) else {}


def first_choice_text(data: Any) -> str:
    """Return ``choices[0].message.content`` or ``""``."""
    content = first_choice_message(data).get("content")
    return content if isinstance(content, str) else ""


def inline_error_message(payload: Mapping[str, Any]) -> Optional[str]:
    """Return the message of an inline ``error`` field, ``""`` when it has none."""
    error = payload.get("error")
    if not error:
        return None
    if isinstance(error, Mapping):
        message = error.get("message")
        return message if isinstance(message, str) else ""
    return ""


def delta_content(payload: Mapping[str, Any]) -> Optional[str]:
    delta = first_choice(payload).get("delta")
    content = delta.get("content") if isinstance(delta, Mapping) else None
    return content if isinstance(content, str) and content else None


def delta_translator(default_error: str) -> Translator:
    """Translator for ``choices[0].delta.content`` streams with inline errors."""

    def _translate(payload: Mapping[str, Any]) -> Optional[StreamChunk]:
        error = inline_error_message(payload)
        if error is not None:
            return StreamChunk.failure(error or default_error)
        content = delta_content(payload)
        return StreamChunk.token(content) if content else None

    return _translate


__all__ = [
    "base_chat_body",
    "bearer_headers",
    "first_choice",
    "first_choice_message",
    "first_choice_text",
    "inline_error_message",
    "delta_content",
    "delta_translator",
]
