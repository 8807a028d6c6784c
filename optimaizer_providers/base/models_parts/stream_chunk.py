"""
StreamChunk tagged variant emitted by streaming adapters.

A stream is zero or more ``token`` chunks followed by exactly one terminal
chunk (``done`` or ``error``). Nothing is emitted after the terminal chunk.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


StreamChunkType = Literal["token", "done", "error"]


@dataclass(frozen=True)
class StreamChunk:
    """One element of a uniform token stream.

    Attributes:
        type: ``"token"``, ``"done"`` or ``"error"``.
        content: Text delta for ``token`` chunks.
        error: Human-readable message for ``error`` chunks.
    """

    type: StreamChunkType
    content: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def token(cls, content: str) -> "StreamChunk":
        return cls(type="token", content=content)

    @classmethod
    def done(cls) -> "StreamChunk":
        return cls(type="done")

    @classmethod
    def failure(cls, message: str) -> "StreamChunk":
        return cls(type="error", error=message)

    @property
    def is_terminal(self) -> bool:
        """True for ``done`` and ``error`` chunks."""
        return self.type != "token"

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape used by the chat routes (``None`` keys dropped)."""
        data: Dict[str, Any] = {"type": self.type}
        if self.content is not None:
            data["content"] = self.content
        if self.error is not None:
            data["error"] = self.error
        return data


__all__ = ["StreamChunk", "StreamChunkType"]
