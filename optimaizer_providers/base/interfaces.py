"""Provider contracts (structural protocols).

Adapters do not inherit from a base class; they satisfy these protocols. The
factory is the only place that picks a concrete vendor.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, runtime_checkable

from .models import ChatParams, ChatWithToolsParams, ChatWithToolsResult, StreamChunk


@runtime_checkable
class ChatProvider(Protocol):
    """Uniform chat contract implemented by every vendor adapter."""

    @property
    def provider_name(self) -> str:
        """Canonical provider id, e.g. ``"openai"`` or ``"google"``."""
        ...

    @property
    def display_name(self) -> str:
        """Vendor name used in error messages, e.g. ``"OpenAI"``."""
        ...

    async def chat(self, params: ChatParams) -> str:
        """Return the full response text.

        Raises:
            ProviderError: non-2xx vendor response (after any one-shot
                feature downgrade), transport failure or request timeout.
            CancelledError: the caller's token was cancelled.
        """
        ...

    def chat_stream(self, params: ChatParams) -> AsyncIterator[StreamChunk]:
        """Yield tokens followed by exactly one ``done`` or ``error`` chunk.

        Failures never raise; they surface as the terminal ``error`` chunk. A
        caller abort ends the stream without further chunks.
        """
        ...


@runtime_checkable
class SupportsNativeTools(Protocol):
    """Capability marker for adapters that expose native function calling."""

    async def chat_with_tools(self, params: ChatWithToolsParams) -> ChatWithToolsResult:
        """Return assistant text plus normalized tool calls."""
        ...


__all__ = ["ChatProvider", "SupportsNativeTools"]
