"""
Request-level tooling flags and per-vendor capability records.

``ToolingOptions`` declares which optional built-in tools a caller would like
(web search, code execution). ``ProviderToolSupport`` is the fixed record of
what a vendor can actually accept; the two are combined by
``base.capabilities.enabled_tooling_for_provider``.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ToolingOptions:
    """Optional built-in tools requested for a single chat call."""

    web_search: bool = False
    code_execution: bool = False

    def any(self) -> bool:
        """Return True when at least one tooling flag is enabled."""
        return bool(self.web_search or self.code_execution)


@dataclass(frozen=True)
class ProviderToolSupport:
    """Static capability declaration for one vendor (no lifecycle)."""

    web_search: bool
    code_execution: bool


__all__ = ["ToolingOptions", "ProviderToolSupport"]
