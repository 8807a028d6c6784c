"""Model parts package: one DTO family per module.

Prefer importing from ``optimaizer_providers.base.models`` for the stable surface.
"""

from .message import ChatMessage, Role
from .tooling import ProviderToolSupport, ToolingOptions
from .chat_params import ChatParams, ReasoningEffort
from .tools import ChatWithToolsParams, ChatWithToolsResult, NativeFunctionTool, NativeToolCall
from .stream_chunk import StreamChunk, StreamChunkType
from .model_info import CatalogSource, ModelCatalogResult, ModelInfo

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
