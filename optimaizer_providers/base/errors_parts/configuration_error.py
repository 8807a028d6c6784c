"""
Configuration error raised before any network call.

A missing credential for a provider that requires one is a configuration
problem, not a vendor failure; it is never retried.
"""
from __future__ import annotations

from .error_code import ErrorCode
from .provider_error import ProviderError


class MissingApiKeyError(ProviderError):
    """Raised when a provider that requires an API key has none configured."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            code=ErrorCode.CONFIGURATION,
            message=(
                f"No API key configured for provider: {provider}. "
                "Set it in the .env file or via the settings panel."
            ),
            provider=provider,
        )


__all__ = ["MissingApiKeyError"]
