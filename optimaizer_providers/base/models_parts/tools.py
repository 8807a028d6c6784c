"""
Native function-calling DTOs.

``NativeFunctionTool`` is the caller-declared function (generic
JSON-Schema-like ``parameters``). ``NativeToolCall`` is the normalized shape of
a vendor's function-calling output: ``arguments`` is always a parsed mapping,
never a raw JSON string.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .chat_params import ChatParams


@dataclass(frozen=True)
class NativeFunctionTool:
    """A callable function declared by the caller."""

    name: str
    description: str
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NativeToolCall:
    """A tool call requested by the model, normalized across vendors."""

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ChatWithToolsParams(ChatParams):
    """``ChatParams`` plus the function tools offered to the model."""

    tools: List[NativeFunctionTool] = field(default_factory=list)


@dataclass
class ChatWithToolsResult:
    """Assistant text plus normalized tool calls.

    ``content`` is the newline-join of every textual segment in emission
    order, trimmed; tool-call segments never contribute to it.
    """

    content: str
    tool_calls: List[NativeToolCall] = field(default_factory=list)


__all__ = [
    "NativeFunctionTool",
    "NativeToolCall",
    "ChatWithToolsParams",
    "ChatWithToolsResult",
]
