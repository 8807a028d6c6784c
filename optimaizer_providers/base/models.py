"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the implementations under
``optimaizer_providers.base.models_parts`` so adapters and callers share one
stable import path.
"""

from .models_parts.message import ChatMessage, Role
from .models_parts.tooling import ProviderToolSupport, ToolingOptions
from .models_parts.chat_params import ChatParams, ReasoningEffort
from .models_parts.tools import (
    ChatWithToolsParams,
    ChatWithToolsResult,
    NativeFunctionTool,
    NativeToolCall,
)
from .models_parts.stream_chunk import StreamChunk, StreamChunkType
from .models_parts.model_info import CatalogSource, ModelCatalogResult, ModelInfo

__all__ = [
    "ChatMessage",
    "Role",
    "ToolingOptions",
    "ProviderToolSupport",
    "ChatParams",
    "ReasoningEffort",
    "NativeFunctionTool",
    "NativeToolCall",
    "ChatWithToolsParams",
    "ChatWithToolsResult",
    "StreamChunk",
    "StreamChunkType",
    "CatalogSource",
    "ModelInfo",
    "ModelCatalogResult",
]
