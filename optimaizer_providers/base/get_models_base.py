"""
Utilities shared by the per-provider ``get_<provider>_models`` fetchers.

This module provides:
- ``fetch_json``: one GET through the pooled httpx client with the model-list
  timeout; non-2xx responses raise ``ModelListHTTPError``.
- Normalization of raw listing rows into ``ModelInfo`` (dedupe by id, sort by
  display name, vendor inference, context length coercion).
- ``describe_fetch_error``: readable, user-facing messages for fetch failures.

Intended usage (inside a provider fetcher)::

    data = await fetch_json(client, f"{base_url}/models", headers=bearer_headers(key))
    return [{"id": row["id"], "vendor": row.get("owned_by")} for row in rows_of(data, "data")]
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from .models import ModelInfo

MODEL_LIST_TIMEOUT_SECONDS = 12.0

# Providers whose model ids carry the author as ``<vendor>/<model>``.
_SLASH_VENDOR_PROVIDERS = ("openrouter", "groq")
_LOCAL_PROVIDERS = ("ollama", "lmstudio")


class ModelListHTTPError(Exception):
    """Non-2xx answer from a model listing endpoint."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"HTTP {status}: {body}")
        self.status = status
        self.body = body


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    params: Optional[Mapping[str, str]] = None,
    timeout: float = MODEL_LIST_TIMEOUT_SECONDS,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Raises:
        ModelListHTTPError: the endpoint answered with a non-2xx status.
        httpx.HTTPError: transport failure or timeout.
        ValueError: the body is not JSON.
    """
    response = await client.get(url, headers=dict(headers or {}), params=params, timeout=timeout)
    if not response.is_success:
        raise ModelListHTTPError(response.status_code, response.text)
    return response.json()


def rows_of(data: Any, key: str) -> List[Mapping[str, Any]]:
    """Return ``data[key]`` as a list of mappings (anything else is dropped)."""
    rows = data.get(key) if isinstance(data, Mapping) else None
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, Mapping)]


def infer_vendor(provider: str, model_id: str, explicit: Optional[str] = None) -> str:
    """Explicit vendor wins; otherwise derive it from the id or the provider."""
    vendor = (explicit or "").strip()
    if vendor:
        return vendor
    if provider in _SLASH_VENDOR_PROVIDERS:
        head, sep, _ = model_id.partition("/")
        if sep and head:
            return head
    if provider in _LOCAL_PROVIDERS:
        return "local"
    return provider


def _context_length(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return max(0, math.floor(number))


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def normalize_items(provider: str, items: Iterable[Mapping[str, Any]]) -> List[ModelInfo]:
    """Convert raw rows into ``ModelInfo``: first id wins, sorted by display name."""
    seen: Dict[str, ModelInfo] = {}
    for item in items or []:
        model_id = item.get("id")
        if not isinstance(model_id, str) or not model_id or model_id in seen:
            continue
        name = (_text(item.get("name")) or "").strip() or model_id
        seen[model_id] = ModelInfo(
            id=model_id,
            name=name,
            vendor=infer_vendor(provider, model_id, _text(item.get("vendor"))),
            description=_text(item.get("description")),
            context_length=_context_length(item.get("context_length")),
        )
    return sorted(seen.values(), key=lambda m: m.name.casefold())


def describe_fetch_error(label: str, exc: BaseException) -> str:
    """Map a fetch failure to the message shown next to the fallback list."""
    if isinstance(exc, httpx.TimeoutException):
        return f"{label} models request timed out. Using fallback list."
    if isinstance(exc, httpx.TransportError):
        return f"Network error while contacting {label} models API. Using fallback list."
    if isinstance(exc, ModelListHTTPError):
        if exc.status in (401, 403):
            return f"{label} rejected the credentials (HTTP {exc.status}). Check API key and permissions."
        if exc.status == 429:
            return f"{label} rate limit reached while loading models (HTTP 429). Using fallback list."
    message = str(exc).strip()
    return message or f"Could not fetch {label} models. Using fallback list."


__all__ = [
    "MODEL_LIST_TIMEOUT_SECONDS",
    "ModelListHTTPError",
    "fetch_json",
    "rows_of",
    "infer_vendor",
    "normalize_items",
    "describe_fetch_error",
]
