"""Inbound request DTOs (pydantic validation)."""

from .chat import ChatRequestDTO, MessageDTO, NativeFunctionToolDTO, ToolingDTO

__all__ = ["ChatRequestDTO", "MessageDTO", "NativeFunctionToolDTO", "ToolingDTO"]
