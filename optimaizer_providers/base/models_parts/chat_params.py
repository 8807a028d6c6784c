"""
ChatParams DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to vendor wire bodies. Optional
fields left as ``None`` are omitted from the vendor request (or replaced by
the vendor default) rather than sent as nulls.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Literal, Optional

from .message import ChatMessage
from .tooling import ToolingOptions

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..cancellation import CancellationToken


ReasoningEffort = Literal["none", "low", "medium", "high", "xhigh"]


@dataclass
class ChatParams:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier (vendor naming).
        messages: Ordered conversation history.
        system_prompt: Optional explicit system prompt. Takes precedence over
            any system-role message embedded in ``messages``.
        max_tokens: Maximum output tokens; invalid or non-positive values are
            dropped by the adapters.
        temperature: Sampling temperature; clamped per vendor.
        reasoning_effort: Optional reasoning effort hint.
        tooling: Optional built-in tooling flags (gated per vendor).
        cancel_token: Optional cooperative cancellation signal owned by the
            caller. Adapters compose it with a fixed request timeout.
    """

    model: str
    messages: List[ChatMessage]
    system_prompt: Optional[str] = None
    max_tokens: Optional[float] = None
    temperature: Optional[float] = None
    reasoning_effort: Optional[ReasoningEffort] = None
    tooling: Optional[ToolingOptions] = None
    cancel_token: Optional["CancellationToken"] = field(default=None, repr=False, compare=False)


__all__ = ["ChatParams", "ReasoningEffort"]
