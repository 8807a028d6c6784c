"""
OpenRouter: get models

Behavior
- The key is normalized and validated first; an unusable key fails before any
  network call with the same message the chat adapter uses.
- ``GET {base_url}/models`` with bearer auth and attribution headers.
- Vendor is the ``<vendor>/`` prefix of the id. Pricing fields are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import httpx

from ..base.errors import ErrorCode, ProviderError
from ..base.get_models_base import fetch_json, rows_of
from ..base.openai_style import bearer_headers
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_REFERER, OPENROUTER_DEFAULT_TITLE
from .auth import normalize_openrouter_api_key, openrouter_api_key_error

PROVIDER = "openrouter"

FALLBACK_MODELS: List[Dict[str, Any]] = [
    {"id": "z-ai/glm-5", "name": "GLM-5"},
    {"id": "anthropic/claude-opus-4.6", "name": "Claude Opus 4.6"},
    {"id": "moonshotai/kimi-k2.5", "name": "Kimi K2.5"},
    {"id": "google/gemini-3-flash-preview", "name": "Gemini 3 Flash Preview"},
    {"id": "deepseek/deepseek-v3.2", "name": "DeepSeek V3.2"},
    {"id": "anthropic/claude-sonnet-4.5", "name": "Claude Sonnet 4.5"},
    {"id": "x-ai/grok-4.1-fast", "name": "Grok 4.1 Fast"},
    {"id": "minimax/minimax-m2.1", "name": "MiniMax M2.1"},
    {"id": "google/gemini-2.5-flash-lite", "name": "Gemini 2.5 Flash Lite"},
    {"id": "openai/gpt-5-nano", "name": "GPT-5 Nano"},
    {"id": "openai/gpt-oss-120b", "name": "GPT-OSS 120B"},
    {"id": "google/gemini-3-pro-preview", "name": "Gemini 3 Pro Preview"},
    {"id": "openai/gpt-5-mini", "name": "GPT-5 Mini"},
    {"id": "mistralai/mistral-nemo", "name": "Mistral Nemo"},
    {"id": "openai/gpt-4o", "name": "GPT-4o"},
    {"id": "google/gemma-3-27b-it", "name": "Gemma 3 27B IT"},
    {"id": "anthropic/claude-haiku-4.5", "name": "Claude Haiku 4.5"},
    {"id": "qwen/qwen3-235b-a22b-2507", "name": "Qwen3 235B A22B 2507"},
]


async def fetch_models(client: httpx.AsyncClient, cfg: Mapping[str, Any]) -> List[Dict[str, Any]]:
    api_key = normalize_openrouter_api_key(cfg.get("api_key"))
    key_error = openrouter_api_key_error(api_key)
    if key_error:
        raise ProviderError(code=ErrorCode.AUTH, message=key_error, provider=PROVIDER)
    base_url = cfg.get("base_url") or OPENROUTER_DEFAULT_BASE_URL
    headers = {
        **bearer_headers(api_key),
        "HTTP-Referer": cfg.get("referer") or OPENROUTER_DEFAULT_REFERER,
        "X-Title": cfg.get("title") or OPENROUTER_DEFAULT_TITLE,
    }
    data = await fetch_json(client, f"{base_url}/models", headers=headers)
    return [
        {
            "id": str(row.get("id") or ""),
            "name": row.get("name"),
            "description": row.get("description"),
            "context_length": row.get("context_length"),
        }
        for row in rows_of(data, "data")
    ]


__all__ = ["PROVIDER", "FALLBACK_MODELS", "fetch_models"]
