"""Groq: get models (OpenAI-compatible ``/models``; pricing fields are ignored)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.get_models_base import fetch_json, rows_of
from ..base.openai_style import bearer_headers
from ..config.defaults import GROQ_DEFAULT_BASE_URL

PROVIDER = "groq"

FALLBACK_MODELS: List[Dict[str, Any]] = [
    {"id": "meta-llama/llama-4-maverick-17b-128e-instruct", "name": "Llama 4 Maverick 17B 128E Instruct"},
    {"id": "meta-llama/llama-4-scout-17b-16e-instruct", "name": "Llama 4 Scout 17B 16E Instruct"},
    {"id": "moonshotai/kimi-k2-instruct-0905", "name": "Kimi K2 Instruct 0905"},
    {"id": "qwen/qwen3-32b", "name": "Qwen3 32B"},
]


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    base_url = cfg.get("base_url") or GROQ_DEFAULT_BASE_URL
    data = await fetch_json(client, f"{base_url}/models", headers=bearer_headers(cfg.get("api_key")))
    return [
        {"id": str(row.get("id") or ""), "vendor": row.get("owned_by"), "context_length": row.get("context_window")}
        for row in rows_of(data, "data")
    ]


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
