"""Anthropic: get models (``GET {base_url}/models``, ``display_name`` as name)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.get_models_base import fetch_json, rows_of
from ..config.defaults import ANTHROPIC_DEFAULT_BASE_URL
from .helpers import build_headers

PROVIDER = "anthropic"

FALLBACK_MODELS: List[Dict[str, Any]] = [
    {"id": "claude-opus-4-6", "name": "Claude Opus 4.6", "vendor": "anthropic"},
    {"id": "claude-sonnet-4-5", "name": "Claude Sonnet 4.5", "vendor": "anthropic"},
    {"id": "claude-haiku-4-5", "name": "Claude Haiku 4.5", "vendor": "anthropic"},
]


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    base_url = cfg.get("base_url") or ANTHROPIC_DEFAULT_BASE_URL
    data = await fetch_json(client, f"{base_url}/models", headers=build_headers(cfg.get("api_key") or ""))
    return [
        {"id": str(row.get("id") or ""), "name": row.get("display_name"), "vendor": "anthropic"}
        for row in rows_of(data, "data")
    ]


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
