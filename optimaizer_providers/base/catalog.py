"""Model catalog.

Purpose
-------
Answer "which models can I pick for provider X" with one call. Each provider
package ships a ``get_<provider>_models`` module exposing ``fetch_models`` and
``FALLBACK_MODELS``; this module resolves configuration, calls the fetcher on
the pooled httpx client, normalizes the rows and caches the answer.

Behavior
--------
- Answers are cached per provider configuration for ``CATALOG_TTL_SECONDS``;
  ``force_refresh`` bypasses the cache.
- A provider that needs a key and has none gets its fallback list with
  ``"No API key configured for this provider."``; no request is sent.
- A failed fetch or an empty live list falls back to the built-in list with a
  readable ``error``. Failures never raise out of the catalog.
- Pricing information returned by vendors is not carried.

Failure modes
-------------
- ``UnknownProviderError`` for ids the factory does not know.
"""

from __future__ import annotations

import time
from importlib import import_module
from threading import Lock
from typing import Any, Dict, Optional, Tuple

import httpx

from ..config import get_provider_config, requires_api_key
from .errors import ErrorCode, classify_exception, classify_status
from .factory import ProviderFactory, UnknownProviderError
from .get_models_base import ModelListHTTPError, describe_fetch_error, normalize_items
from .http.client import get_async_client
from .logging import LogContext, get_logger, normalized_log_event
from .models import ModelCatalogResult

CATALOG_TTL_SECONDS = 180.0

NO_API_KEY_MESSAGE = "No API key configured for this provider."
EMPTY_LIST_MESSAGE = "Provider returned no models. Using fallback list."

_FETCHERS: Dict[str, str] = {
    "openai": "optimaizer_providers.openai.get_openai_models",
    "anthropic": "optimaizer_providers.anthropic.get_anthropic_models",
    "google": "optimaizer_providers.gemini.get_gemini_models",
    "groq": "optimaizer_providers.groq.get_groq_models",
    "openrouter": "optimaizer_providers.openrouter.get_openrouter_models",
    "ollama": "optimaizer_providers.ollama.get_ollama_models",
    "lmstudio": "optimaizer_providers.lmstudio.get_lmstudio_models",
}

LABELS: Dict[str, str] = {
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "google": "Google Gemini",
    "groq": "Groq",
    "openrouter": "OpenRouter",
    "ollama": "Ollama",
    "lmstudio": "LM Studio",
}

_CacheKey = Tuple[str, Optional[str], Optional[str]]
_CACHE: Dict[_CacheKey, Tuple[float, ModelCatalogResult]] = {}
_LOCK = Lock()

_logger = get_logger("providers.models")


def clear_catalog_cache() -> None:
    """Forget every cached catalog answer."""
    with _LOCK:
        _CACHE.clear()


def _cached(key: _CacheKey) -> Optional[ModelCatalogResult]:
    with _LOCK:
        entry = _CACHE.get(key)
        if entry is None:
            return None
        expires_at, result = entry
        if expires_at <= time.monotonic():
            del _CACHE[key]
            return None
        return result


def _store(key: _CacheKey, result: ModelCatalogResult) -> ModelCatalogResult:
    with _LOCK:
        _CACHE[key] = (time.monotonic() + CATALOG_TTL_SECONDS, result)
    return result


def _error_code(exc: BaseException) -> ErrorCode:
    if isinstance(exc, ModelListHTTPError):
        return classify_status(exc.status)
    return classify_exception(exc)


def _fallback(module: Any, name: str, *, needs_key: bool, configured: bool, error: str) -> ModelCatalogResult:
    return ModelCatalogResult(
        provider=name,
        models=normalize_items(name, module.FALLBACK_MODELS),
        source="fallback",
        fetched_at=time.time(),
        requires_api_key=needs_key,
        configured=configured,
        error=error,
    )


async def get_provider_models_catalog(  # noqa: PLR0913
    provider: str,
    *,
    force_refresh: bool = False,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ModelCatalogResult:
    """Return the selectable models for ``provider``.

    Parameters
    ----------
    provider:
        Canonical provider id (see ``ProviderFactory.supported()``).
    force_refresh:
        Skip the cache and query the vendor again.
    api_key, base_url:
        Explicit values; they win over file and environment configuration.
    http_client:
        Client to use instead of the pooled ``"models"`` client.
    """
    name = (provider or "").lower().strip()
    if name not in ProviderFactory.supported() or name not in _FETCHERS:
        raise UnknownProviderError(f"Unknown provider '{provider}'")

    cfg = get_provider_config(name, {"api_key": api_key, "base_url": base_url})
    key: _CacheKey = (name, cfg.get("base_url"), cfg.get("api_key"))
    if not force_refresh:
        hit = _cached(key)
        if hit is not None:
            return hit

    module = import_module(_FETCHERS[name])
    label = LABELS.get(name, name)
    needs_key = requires_api_key(name)
    configured = bool(cfg.get("api_key")) or not needs_key
    ctx = LogContext(provider=name)

    if needs_key and not cfg.get("api_key"):
        normalized_log_event(_logger, "models.fetch", ctx, phase="finalize", emitted=False, source="fallback")
        return _store(key, _fallback(module, name, needs_key=needs_key, configured=False, error=NO_API_KEY_MESSAGE))

    client = http_client or get_async_client(None, purpose="models")
    started = time.perf_counter()
    try:
        rows = await module.fetch_models(client, cfg)
    except Exception as exc:  # noqa: BLE001 - any fetch failure degrades to the fallback list
        message = describe_fetch_error(label, exc)
        normalized_log_event(
            _logger,
            "models.fetch",
            ctx,
            phase="finalize",
            error_code=_error_code(exc).value,
            emitted=False,
            source="fallback",
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
        return _store(key, _fallback(module, name, needs_key=needs_key, configured=configured, error=message))

    models = normalize_items(name, rows)
    latency_ms = int((time.perf_counter() - started) * 1000)
    if not models:
        normalized_log_event(
            _logger, "models.fetch", ctx, phase="finalize", emitted=False, source="fallback", latency_ms=latency_ms
        )
        return _store(key, _fallback(module, name, needs_key=needs_key, configured=configured, error=EMPTY_LIST_MESSAGE))

    normalized_log_event(
        _logger,
        "models.fetch",
        ctx,
        phase="finalize",
        emitted=True,
        tokens={"models": len(models)},
        source="live",
        latency_ms=latency_ms,
    )
    return _store(
        key,
        ModelCatalogResult(
            provider=name,
            models=models,
            source="live",
            fetched_at=time.time(),
            requires_api_key=needs_key,
            configured=configured,
        ),
    )


__all__ = [
    "CATALOG_TTL_SECONDS",
    "EMPTY_LIST_MESSAGE",
    "LABELS",
    "NO_API_KEY_MESSAGE",
    "clear_catalog_cache",
    "get_provider_models_catalog",
]
