"""Static per-vendor capability table for optional built-in tooling.

The table is process-wide read-only data (a ``MappingProxyType``). Request
builders consult it through ``enabled_tooling_for_provider`` so a tooling flag
a vendor cannot honour is dropped silently instead of being sent.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .models import ProviderToolSupport, ToolingOptions

_NO_SUPPORT = ProviderToolSupport(web_search=False, code_execution=False)

PROVIDER_TOOL_SUPPORT: Mapping[str, ProviderToolSupport] = MappingProxyType(
    {
        "anthropic": ProviderToolSupport(web_search=True, code_execution=True),
        "google": ProviderToolSupport(web_search=True, code_execution=True),
        "groq": _NO_SUPPORT,
        "lmstudio": _NO_SUPPORT,
        "ollama": _NO_SUPPORT,
        "openai": ProviderToolSupport(web_search=True, code_execution=True),
        "openrouter": ProviderToolSupport(web_search=True, code_execution=False),
    }
)


def tool_support_for(provider: str) -> ProviderToolSupport:
    """Return the capability record for ``provider`` (unknown -> no support)."""
    return PROVIDER_TOOL_SUPPORT.get(provider, _NO_SUPPORT)


def enabled_tooling_for_provider(provider: str, tooling: Optional[ToolingOptions]) -> ToolingOptions:
    """Intersect the requested tooling flags with what ``provider`` supports."""
    if tooling is None:
        return ToolingOptions()
    support = tool_support_for(provider)
    return ToolingOptions(
        web_search=bool(tooling.web_search and support.web_search),
        code_execution=bool(tooling.code_execution and support.code_execution),
    )


__all__ = ["PROVIDER_TOOL_SUPPORT", "tool_support_for", "enabled_tooling_for_provider"]
