"""
ChatMessage DTO used across provider adapters.

Defines the ``ChatMessage`` dataclass and the ``Role`` literal. Content is
always plain text; ordering of messages in a conversation is significant and
adapters must never reorder turns.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal


# Roles accepted by the uniform chat contract.
Role = Literal["user", "assistant", "system"]


@dataclass(frozen=True)
class ChatMessage:
    """A single role-tagged chat turn.

    Attributes:
        role: ``"user"``, ``"assistant"`` or ``"system"``. System messages are
            routed out-of-band by some vendors (dedicated ``system`` field or
            instruction block) and filtered from the turn list by others.
        content: Plain text content of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-compatible ``{"role", "content"}`` mapping."""
        return {"role": self.role, "content": self.content}


__all__ = ["ChatMessage", "Role"]
