"""Message formatting helpers shared by the adapters.

Three turn models are covered:

* native system slot (OpenAI-compatible vendors): ``build_messages_with_system``
* single top-level system field with strictly alternating turns (Anthropic):
  ``format_alternating_turns``
* ``model`` role and a separate instruction block (Gemini):
  ``format_model_role_contents`` + ``resolve_system_instruction``

All helpers are pure: inputs are never mutated and message order is kept.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models import ChatMessage

TURN_SEPARATOR = "\n\n"


@dataclass
class Turn:
    """A user/assistant turn after system extraction and merging."""

    role: str
    content: str


def _embedded_system_text(messages: Sequence[ChatMessage]) -> Optional[str]:
    texts = [m.content for m in messages if m.role == "system" and m.content]
    return TURN_SEPARATOR.join(texts) if texts else None


def build_messages_with_system(
    messages: Sequence[ChatMessage], system_prompt: Optional[str]
) -> List[Dict[str, Any]]:
    """Return OpenAI-style ``{"role", "content"}`` dicts.

    An explicit ``system_prompt`` is prepended and embedded system messages are
    dropped (explicit wins). Without one, messages pass through unchanged.
    """
    if not system_prompt:
        return [m.to_dict() for m in messages]
    out = [{"role": "system", "content": system_prompt}]
    out.extend(m.to_dict() for m in messages if m.role != "system")
    return out


def format_alternating_turns(
    messages: Sequence[ChatMessage], system_prompt: Optional[str] = None
) -> Tuple[Optional[str], List[Turn]]:
    """Split ``messages`` into ``(system, turns)`` for strict-alternation vendors.

    - system-role messages are lifted out; the explicit prompt wins over them
    - leading assistant turns are dropped (nothing to respond to)
    - adjacent same-role turns are merged with a blank line
    """
    system = system_prompt or _embedded_system_text(messages)
    turns: List[Turn] = []
    for message in messages:
        if message.role == "system":
            continue
        if not turns and message.role == "assistant":
            continue
        if turns and turns[-1].role == message.role:
            turns[-1].content = f"{turns[-1].content}{TURN_SEPARATOR}{message.content}"
            continue
        turns.append(Turn(role=message.role, content=message.content))
    return system, turns


def format_model_role_contents(messages: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    """Return Gemini ``contents``: system turns removed, ``assistant`` -> ``model``."""
    return [
        {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
        for m in messages
        if m.role != "system"
    ]


def resolve_system_instruction(
    messages: Sequence[ChatMessage], system_prompt: Optional[str]
) -> Optional[Dict[str, Any]]:
    """Return a ``systemInstruction`` block, or ``None`` when there is no system text."""
    text = system_prompt or _embedded_system_text(messages)
    if not text:
        return None
    return {"parts": [{"text": text}]}


__all__ = [
    "TURN_SEPARATOR",
    "Turn",
    "build_messages_with_system",
    "format_alternating_turns",
    "format_model_role_contents",
    "resolve_system_instruction",
]
