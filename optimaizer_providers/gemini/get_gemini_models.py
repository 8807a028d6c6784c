"""
Gemini: get models

Behavior
- ``GET {base_url}/models`` with the ``x-goog-api-key`` header.
- Only models that support ``generateContent`` or ``streamGenerateContent``
  are listed; the ``models/`` prefix is stripped from names.
- ``inputTokenLimit`` becomes ``context_length``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.get_models_base import fetch_json, rows_of
from ..config.defaults import GEMINI_DEFAULT_BASE_URL

PROVIDER = "google"

FALLBACK_MODELS: List[Dict[str, Any]] = [
    {"id": "gemini-3-pro-preview", "name": "Gemini 3 Pro Preview", "vendor": "google"},
    {"id": "gemini-3-flash-preview", "name": "Gemini 3 Flash Preview", "vendor": "google"},
    {"id": "gemini-2.5-flash-lite", "name": "Gemini 2.5 Flash Lite", "vendor": "google"},
]

_CHAT_METHODS = frozenset({"generateContent", "streamGenerateContent"})


def _supports_chat(row: Mapping[str, Any]) -> bool:
    methods = row.get("supportedGenerationMethods")
    return isinstance(methods, list) and bool(_CHAT_METHODS.intersection(methods))


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    base_url = cfg.get("base_url") or GEMINI_DEFAULT_BASE_URL
    data = await fetch_json(client, f"{base_url}/models", headers={"x-goog-api-key": cfg.get("api_key") or ""})
    out: List[Dict[str, Any]] = []
    for row in rows_of(data, "models"):
        if not _supports_chat(row):
            continue
        raw_name = str(row.get("name") or "")
        model_id = raw_name[len("models/"):] if raw_name.startswith("models/") else raw_name
        out.append(
            {
                "id": model_id,
                "name": row.get("displayName"),
                "description": row.get("description"),
                "context_length": row.get("inputTokenLimit"),
                "vendor": "google",
            }
        )
    return out


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
