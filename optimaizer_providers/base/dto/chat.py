"""
Pydantic DTOs and validators for inbound chat requests.

Purpose
-------
Validate a raw chat payload (as received by an HTTP route) before it enters
an adapter, then convert it to the ``ChatParams`` dataclass family.

External dependencies: Pydantic only (no network). No timeouts.

Fallback semantics: none. Validation either succeeds or raises
``pydantic.ValidationError``; callers map that to a 4xx at their edge.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..cancellation import CancellationToken
from ..models import (
    ChatMessage,
    ChatParams,
    ChatWithToolsParams,
    NativeFunctionTool,
    ToolingOptions,
)

ProviderId = Literal["openai", "anthropic", "google", "groq", "openrouter", "ollama", "lmstudio"]


class MessageDTO(BaseModel):
    """A role-tagged text message."""

    role: Literal["user", "assistant", "system"]
    content: str


class ToolingDTO(BaseModel):
    """Optional built-in tooling flags (camelCase accepted)."""

    model_config = ConfigDict(populate_by_name=True)

    web_search: bool = Field(default=False, alias="webSearch")
    code_execution: bool = Field(default=False, alias="codeExecution")


class NativeFunctionToolDTO(BaseModel):
    """Caller-declared function tool.

    ``parameters`` stays loose (any JSON-Schema-like mapping); adapters
    translate it per vendor.
    """

    name: str = Field(..., min_length=1)
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tool name must be non-blank")
        return value.strip()

    def to_tool(self) -> NativeFunctionTool:
        return NativeFunctionTool(name=self.name, description=self.description, parameters=dict(self.parameters))


class ChatRequestDTO(BaseModel):
    """Validated chat request.

    Numeric fields are deliberately permissive: out-of-range ``max_tokens`` and
    ``temperature`` values are normalized by the adapters rather than rejected
    here.

    Raises:
        ValidationError: unknown provider, blank model, empty message list,
            or an unsupported role.
    """

    model_config = ConfigDict(populate_by_name=True)

    provider: ProviderId
    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")
    max_tokens: Optional[float] = Field(default=None, alias="maxTokens")
    temperature: Optional[float] = None
    reasoning_effort: Optional[Literal["none", "low", "medium", "high", "xhigh"]] = Field(
        default=None, alias="reasoningEffort"
    )
    tooling: Optional[ToolingDTO] = None
    tools: Optional[List[NativeFunctionToolDTO]] = None

    @field_validator("model")
    @classmethod
    def _model_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("model must be non-blank")
        return value.strip()

    def to_params(self, cancel_token: Optional[CancellationToken] = None) -> ChatParams:
        """Convert to ``ChatParams`` (or ``ChatWithToolsParams`` when tools are present)."""
        fields: Dict[str, Any] = {
            "model": self.model,
            "messages": [ChatMessage(role=m.role, content=m.content) for m in self.messages],
            "system_prompt": self.system_prompt,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "reasoning_effort": self.reasoning_effort,
            "tooling": (
                ToolingOptions(web_search=self.tooling.web_search, code_execution=self.tooling.code_execution)
                if self.tooling is not None
                else None
            ),
            "cancel_token": cancel_token,
        }
        if self.tools:
            return ChatWithToolsParams(tools=[t.to_tool() for t in self.tools], **fields)
        return ChatParams(**fields)


__all__ = [
    "ProviderId",
    "MessageDTO",
    "ToolingDTO",
    "NativeFunctionToolDTO",
    "ChatRequestDTO",
]
