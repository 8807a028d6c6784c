"""Provider Factory utilities.

Purpose
-------
Centralize creation of adapter instances implementing ``ChatProvider``.
Credentials and base URLs are resolved through ``get_provider_config`` and
adapters are imported lazily with ``importlib`` so that constructing one
provider never imports the others.

Failure modes
-------------
- ``UnknownProviderError``: the id is not registered, the adapter module
  cannot be imported, or the constructor rejects its arguments.
- ``MissingApiKeyError``: the provider needs a key and none is configured.
  Raised before any network activity.

No timeouts, retries or fallbacks are introduced here.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple, Type

import httpx

from ..config import get_provider_config, requires_api_key
from .errors import MissingApiKeyError


class UnknownProviderError(Exception):
    """Raised when a provider id cannot be resolved or its adapter initialized."""


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters from a canonical id (e.g. ``"openai"``)."""

    # Map canonical provider ids to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "optimaizer_providers.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "optimaizer_providers.anthropic.client", "class": "AnthropicProvider"},
        "google": {"module": "optimaizer_providers.gemini.client", "class": "GeminiProvider"},
        "groq": {"module": "optimaizer_providers.groq.client", "class": "GroqProvider"},
        "openrouter": {"module": "optimaizer_providers.openrouter.client", "class": "OpenRouterProvider"},
        "ollama": {"module": "optimaizer_providers.ollama.client", "class": "OllamaProvider"},
        "lmstudio": {"module": "optimaizer_providers.lmstudio.client", "class": "LMStudioProvider"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **kwargs: Any,
    ) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider id (``openai``, ``anthropic``, ``google``,
            ``groq``, ``openrouter``, ``ollama``, ``lmstudio``).
        api_key, base_url:
            Explicit values; they win over file and environment configuration.
        http_client:
            Optional ``httpx.AsyncClient`` shared by every call of the adapter.
        **kwargs:
            Extra adapter constructor arguments (e.g. OpenRouter ``referer``).

        Raises
        ------
        UnknownProviderError
            Unknown id, import failure, missing class or bad constructor args.
        MissingApiKeyError
            The provider needs a key and none is configured.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        cfg = get_provider_config(name, {"api_key": api_key, "base_url": base_url})
        ctor_kwargs: Dict[str, Any] = {"base_url": cfg.get("base_url")}
        if requires_api_key(name):
            if not cfg.get("api_key"):
                raise MissingApiKeyError(name)
            ctor_kwargs["api_key"] = cfg["api_key"]
        if name == "openrouter":
            ctor_kwargs["referer"] = cfg.get("referer")
            ctor_kwargs["title"] = cfg.get("title")
        if http_client is not None:
            ctor_kwargs["http_client"] = http_client
        ctor_kwargs.update(kwargs)

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**ctor_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(f"Invalid arguments for '{provider}' adapter constructor: {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported provider ids in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
