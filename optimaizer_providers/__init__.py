"""optimaizer_providers package

Uniform chat-completion surface over OpenAI, Anthropic, Google Gemini, Groq,
OpenRouter, Ollama and LM Studio.

Purpose:
    Callers build a ``ChatParams`` (or validate an inbound payload with
    ``ChatRequestDTO``), create an adapter with :func:`create` and call
    ``chat``, ``chat_with_tools`` or iterate ``chat_stream``. Every adapter
    yields the same ``StreamChunk`` sequence and raises the same
    ``ProviderError`` taxonomy.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Models: ``ChatMessage``, ``ChatParams``, ``StreamChunk`` ...
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Catalog: :func:`get_provider_models_catalog`, ``ModelInfo``
"""

from .base import (
    CancellationToken,
    CancelledError,
    ChatMessage,
    ChatParams,
    ChatProvider,
    ChatWithToolsParams,
    ChatWithToolsResult,
    ErrorCode,
    MissingApiKeyError,
    ModelCatalogResult,
    ModelInfo,
    NativeFunctionTool,
    NativeToolCall,
    ProviderError,
    ProviderFactory,
    StreamChunk,
    SupportsNativeTools,
    ToolingOptions,
    UnknownProviderError,
    clear_catalog_cache,
    get_provider_models_catalog,
)
from .base.dto import ChatRequestDTO
from .base.http.client import close_all_clients

__version__ = "0.1.0"


def create(provider: str, **kwargs):
    """Create a provider adapter by canonical id (``ProviderFactory.create``)."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = [
    "__version__",
    "create",
    "close_all_clients",
    "get_provider_models_catalog",
    "clear_catalog_cache",
    "ProviderFactory",
    "ChatProvider",
    "SupportsNativeTools",
    "ChatMessage",
    "ChatParams",
    "ChatWithToolsParams",
    "ChatWithToolsResult",
    "ChatRequestDTO",
    "NativeFunctionTool",
    "NativeToolCall",
    "StreamChunk",
    "ModelInfo",
    "ModelCatalogResult",
    "ToolingOptions",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "MissingApiKeyError",
    "UnknownProviderError",
]
