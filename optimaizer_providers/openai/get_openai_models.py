"""OpenAI: get models

Behavior
- ``GET {base_url}/models`` with bearer auth; ``owned_by`` becomes the vendor.
- ``FALLBACK_MODELS`` is served by the catalog when the live call fails.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.get_models_base import fetch_json, rows_of
from ..base.openai_style import bearer_headers
from ..config.defaults import OPENAI_DEFAULT_BASE_URL

PROVIDER = "openai"

FALLBACK_MODELS: List[Dict[str, Any]] = [
    {"id": "gpt-5.2", "name": "GPT-5.2", "vendor": "openai"},
]


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    base_url = cfg.get("base_url") or OPENAI_DEFAULT_BASE_URL
    data = await fetch_json(client, f"{base_url}/models", headers=bearer_headers(cfg.get("api_key")))
    return [
        {"id": str(row.get("id") or ""), "vendor": row.get("owned_by") or "openai"}
        for row in rows_of(data, "data")
    ]


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
