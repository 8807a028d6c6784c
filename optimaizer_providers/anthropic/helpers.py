"""
Anthropic Messages API request shaping.

Purpose
-------
Pure builders for the ``/v1/messages`` body and headers, kept apart from the
client so the prompt-caching decision and the beta header list can be tested
without a transport.

Prompt caching
--------------
Caching pays off only for a reusable prefix. It is enabled when no code
execution is requested, there is a system text or more than one turn, and the
system text plus every turn except the last is at least
``PROMPT_CACHE_MIN_PREFIX_CHARS`` characters long. When enabled, the system
block and every turn but the last carry ``cache_control: ephemeral``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.models import StreamChunk, ToolingOptions
from ..base.utils.messages import Turn
from ..config.defaults import ANTHROPIC_API_VERSION

PROMPT_CACHING_BETA = "prompt-caching-2024-07-31"
CODE_EXECUTION_BETA = "code-execution-2025-08-25"
PROMPT_CACHE_MIN_PREFIX_CHARS = 100

RETRY_KEYWORDS = (
    "tool",
    "unsupported",
    "web_search",
    "code_execution",
    "anthropic-beta",
    "prompt_caching",
    "prompt-caching",
    "cache_control",
)

_EPHEMERAL = {"type": "ephemeral"}


def should_enable_prompt_caching(system: Optional[str], turns: Sequence[Turn], tooling: ToolingOptions) -> bool:
    """Decide whether the request prefix is worth caching."""
    if tooling.code_execution:
        return False
    system_text = system or ""
    if not system_text.strip() and len(turns) <= 1:
        return False
    prefix_chars = len(system_text) + sum(len(turn.content) for turn in turns[:-1])
    return prefix_chars >= PROMPT_CACHE_MIN_PREFIX_CHARS


def build_tooling(tooling: ToolingOptions) -> List[Dict[str, Any]]:
    tools: List[Dict[str, Any]] = []
    if tooling.web_search:
        tools.append({"type": "web_search_20250305", "name": "web_search"})
    if tooling.code_execution:
        tools.append({"type": "code_execution_20250825", "name": "code_execution"})
    return tools


def text_block(text: str, cacheable: bool = False) -> Dict[str, Any]:
    block: Dict[str, Any] = {"type": "text", "text": text}
    if cacheable:
        block["cache_control"] = dict(_EPHEMERAL)
    return block


def build_body(  # noqa: PLR0913
    model: str,
    system: Optional[str],
    turns: Sequence[Turn],
    *,
    max_tokens: int,
    temperature: Optional[float],
    tools: Sequence[Mapping[str, Any]] = (),
    stream: bool = False,
    prompt_caching: bool = False,
) -> Dict[str, Any]:
    """Assemble the Messages API body.

    ``stream`` is only present on streaming requests and ``temperature`` only
    when it is usable.
    """
    last = len(turns) - 1
    body: Dict[str, Any] = {
        "model": model,
        "max_tokens": max_tokens,
        "messages": [
            {"role": turn.role, "content": [text_block(turn.content, prompt_caching and index < last)]}
            for index, turn in enumerate(turns)
        ],
    }
    if stream:
        body["stream"] = True
    if temperature is not None:
        body["temperature"] = temperature
    if system:
        body["system"] = [text_block(system, True)] if prompt_caching else system
    if tools:
        body["tools"] = list(tools)
    return body


def build_headers(api_key: str, *, code_execution: bool = False, prompt_caching: bool = False) -> Dict[str, str]:
    headers = {"x-api-key": api_key, "anthropic-version": ANTHROPIC_API_VERSION}
    betas: List[str] = []
    if code_execution:
        betas.append(CODE_EXECUTION_BETA)
    if prompt_caching:
        betas.append(PROMPT_CACHING_BETA)
    if betas:
        headers["anthropic-beta"] = ",".join(betas)
    return headers


def first_text_block(data: Any) -> str:
    """Return ``content[0].text`` or ``""``."""
    blocks = data.get("content") if isinstance(data, Mapping) else None
    if not isinstance(blocks, list) or not blocks or not isinstance(blocks[0], Mapping):
        return ""
    text = blocks[0].get("text")
    return text if isinstance(text, str) else ""


def translate_event(payload: Mapping[str, Any]) -> Optional[StreamChunk]:
    """Map one Anthropic SSE event onto a chunk; unrelated events are skipped."""
    kind = payload.get("type")
    if kind == "content_block_delta":
        delta = payload.get("delta")
        text = delta.get("text") if isinstance(delta, Mapping) else None
        return StreamChunk.token(text) if isinstance(text, str) and text else None
    if kind == "error":
        error = payload.get("error")
        message = error.get("message") if isinstance(error, Mapping) else None
        return StreamChunk.failure(message if isinstance(message, str) and message else "Anthropic stream error")
    if kind == "message_stop":
        return StreamChunk.done()
    return None


__all__ = [
    "PROMPT_CACHING_BETA",
    "CODE_EXECUTION_BETA",
    "PROMPT_CACHE_MIN_PREFIX_CHARS",
    "RETRY_KEYWORDS",
    "should_enable_prompt_caching",
    "build_tooling",
    "text_block",
    "build_body",
    "build_headers",
    "first_text_block",
    "translate_event",
]
