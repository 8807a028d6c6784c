"""OpenRouter provider package."""

from .auth import normalize_openrouter_api_key, openrouter_api_key_error
from .client import OpenRouterProvider

__all__ = ["OpenRouterProvider", "normalize_openrouter_api_key", "openrouter_api_key_error"]
