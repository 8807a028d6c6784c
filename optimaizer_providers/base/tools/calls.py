"""
Native tool-call extraction from non-streaming vendor responses.

Every extractor yields ``NativeToolCall`` objects whose ``arguments`` is a
parsed dict. Entries without a non-empty string name are discarded; missing
ids are synthesized as ``{kind}_{ordinal}`` (1-based position in the vendor
list).
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models import ChatWithToolsResult, NativeToolCall


def parse_tool_arguments(raw: Any) -> Dict[str, Any]:
    """Return a dict for ``raw`` arguments; never raises.

    str -> JSON-decoded object or ``{}``; mapping -> copy; anything else -> ``{}``.
    """
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    if isinstance(raw, Mapping):
        return dict(raw)
    return {}


def join_text_segments(segments: Iterable[str]) -> str:
    """Newline-join textual segments in order and trim the result."""
    return "\n".join(segments).strip()


def _call_id(raw_id: Any, kind: str, index: int) -> str:
    return str(raw_id) if raw_id else f"{kind}_{index + 1}"


def extract_function_tool_calls(message: Any, kind: str = "tool_call") -> List[NativeToolCall]:
    """Extract OpenAI-style ``message.tool_calls[].function`` entries."""
    raw_calls = message.get("tool_calls") if isinstance(message, Mapping) else None
    if not isinstance(raw_calls, list):
        return []
    calls: List[NativeToolCall] = []
    for index, raw in enumerate(raw_calls):
        function = raw.get("function") if isinstance(raw, Mapping) else None
        name = function.get("name") if isinstance(function, Mapping) else None
        if not isinstance(name, str) or not name:
            continue
        calls.append(
            NativeToolCall(
                id=_call_id(raw.get("id"), kind, index),
                name=name,
                arguments=parse_tool_arguments(function.get("arguments")),
            )
        )
    return calls


def function_message_result(message: Any) -> ChatWithToolsResult:
    """Build a result from an OpenAI-style assistant ``message``."""
    content = message.get("content") if isinstance(message, Mapping) else None
    return ChatWithToolsResult(
        content=content if isinstance(content, str) else "",
        tool_calls=extract_function_tool_calls(message),
    )


def extract_anthropic_content(data: Any) -> ChatWithToolsResult:
    """Split Anthropic ``content`` blocks into text and ``tool_use`` calls."""
    blocks = data.get("content") if isinstance(data, Mapping) else None
    texts: List[str] = []
    calls: List[NativeToolCall] = []
    for index, block in enumerate(blocks if isinstance(blocks, list) else []):
        if not isinstance(block, Mapping):
            continue
        if block.get("type") == "text" and isinstance(block.get("text"), str):
            texts.append(block["text"])
            continue
        name = block.get("name")
        if block.get("type") != "tool_use" or not isinstance(name, str) or not name:
            continue
        calls.append(
            NativeToolCall(
                id=_call_id(block.get("id"), "tool_use", index),
                name=name,
                arguments=parse_tool_arguments(block.get("input")),
            )
        )
    return ChatWithToolsResult(content=join_text_segments(texts), tool_calls=calls)


def gemini_parts(data: Any) -> List[Any]:
    """Return ``candidates[0].content.parts`` or an empty list."""
    candidates: Optional[Any] = data.get("candidates") if isinstance(data, Mapping) else None
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], Mapping):
        return []
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, Mapping) else None
    return parts if isinstance(parts, list) else []


def extract_gemini_content(data: Any) -> ChatWithToolsResult:
    """Split Gemini parts into non-blank text and ``functionCall`` entries."""
    texts: List[str] = []
    calls: List[NativeToolCall] = []
    for index, part in enumerate(gemini_parts(data)):
        if not isinstance(part, Mapping):
            continue
        text = part.get("text")
        if isinstance(text, str) and text.strip():
            texts.append(text)
        function_call = part.get("functionCall")
        name = function_call.get("name") if isinstance(function_call, Mapping) else None
        if not isinstance(name, str) or not name:
            continue
        calls.append(
            NativeToolCall(
                id=_call_id(None, "function_call", index),
                name=name,
                arguments=parse_tool_arguments(function_call.get("args")),
            )
        )
    return ChatWithToolsResult(content=join_text_segments(texts), tool_calls=calls)


__all__ = [
    "parse_tool_arguments",
    "join_text_segments",
    "extract_function_tool_calls",
    "function_message_result",
    "extract_anthropic_content",
    "gemini_parts",
    "extract_gemini_content",
]
