"""Ollama: locally installed models from ``GET {base_url}/api/tags`` (no auth)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.get_models_base import fetch_json, rows_of
from ..config.defaults import OLLAMA_DEFAULT_BASE_URL

PROVIDER = "ollama"

# Nothing sensible to suggest when the local runtime is down.
FALLBACK_MODELS: List[Dict[str, Any]] = []


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    base_url = cfg.get("base_url") or OLLAMA_DEFAULT_BASE_URL
    data = await fetch_json(client, f"{base_url}/api/tags")
    out: List[Dict[str, Any]] = []
    for row in rows_of(data, "models"):
        model_id = str(row.get("model") or row.get("name") or "")
        out.append({"id": model_id, "name": row.get("name"), "vendor": "ollama"})
    return out


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
