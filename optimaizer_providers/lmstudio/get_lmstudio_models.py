"""LM Studio: loaded models from the OpenAI-compatible ``GET {base_url}/v1/models``."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.get_models_base import fetch_json, rows_of
from ..config.defaults import LMSTUDIO_DEFAULT_BASE_URL

PROVIDER = "lmstudio"

FALLBACK_MODELS: List[Dict[str, Any]] = []


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    base_url = cfg.get("base_url") or LMSTUDIO_DEFAULT_BASE_URL
    data = await fetch_json(client, f"{base_url}/v1/models")
    return [
        {"id": str(row.get("id") or ""), "vendor": row.get("owned_by") or "local"}
        for row in rows_of(data, "data")
    ]


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
