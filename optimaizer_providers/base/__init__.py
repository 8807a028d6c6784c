"""
Providers Base Package

Exports provider-agnostic contracts, DTOs and the provider factory shared by
every vendor adapter:

- Interfaces: ``ChatProvider`` / ``SupportsNativeTools`` protocols
- Models: normalized request, result and stream chunk types
- Errors: ``ProviderError`` taxonomy
- Factory: lazy creation of adapters by canonical id
- Catalog: per-provider model listings with a built-in fallback
"""

from .cancellation import CancellationToken, CancelledError
from .capabilities import PROVIDER_TOOL_SUPPORT, enabled_tooling_for_provider, tool_support_for
from .catalog import clear_catalog_cache, get_provider_models_catalog
from .errors import ErrorCode, MissingApiKeyError, ProviderError
from .factory import ProviderFactory, UnknownProviderError, create_provider
from .interfaces import ChatProvider, SupportsNativeTools
from .models import (
    ChatMessage,
    ChatParams,
    ChatWithToolsParams,
    ChatWithToolsResult,
    ModelCatalogResult,
    ModelInfo,
    NativeFunctionTool,
    NativeToolCall,
    ProviderToolSupport,
    StreamChunk,
    ToolingOptions,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "ChatMessage",
    "ChatParams",
    "ChatWithToolsParams",
    "ChatWithToolsResult",
    "NativeFunctionTool",
    "NativeToolCall",
    "ProviderToolSupport",
    "StreamChunk",
    "ToolingOptions",
    # Interfaces
    "ChatProvider",
    "SupportsNativeTools",
    # Capabilities
    "PROVIDER_TOOL_SUPPORT",
    "enabled_tooling_for_provider",
    "tool_support_for",
    # Errors
    "ErrorCode",
    "MissingApiKeyError",
    "ProviderError",
    "UnknownProviderError",
    # Factory
    "ProviderFactory",
    "create_provider",
    # Catalog
    "ModelCatalogResult",
    "ModelInfo",
    "clear_catalog_cache",
    "get_provider_models_catalog",
    # Runtime
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
]
