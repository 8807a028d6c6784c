"""optimaizer_providers.config.defaults
====================================

Central place for small, stable default values used by the adapters: vendor
endpoints, local runtime base URLs, attribution headers and default models.
These can be overridden via environment variables or external configuration.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider ids ----
PROVIDER_IDS = ("openai", "anthropic", "google", "groq", "openrouter", "ollama", "lmstudio")
# Local runtimes authenticate nothing; every other provider needs a key.
PROVIDERS_WITHOUT_API_KEYS = ("ollama", "lmstudio")

# ---- Hosted endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GROQ_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_REFERER = "https://optimaizer.app"
OPENROUTER_DEFAULT_TITLE = "optimAIzer"

# ---- Local runtimes ----
OLLAMA_DEFAULT_BASE_URL = "http://127.0.0.1:11434"
LMSTUDIO_DEFAULT_BASE_URL = "http://127.0.0.1:1234"

# ---- Default models (used only when a caller asks for one) ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GROQ_DEFAULT_MODEL = "llama-3.3-70b-versatile"
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OLLAMA_DEFAULT_MODEL = "llama3.1"

# ---- Request shaping ----
DEFAULT_TEMPERATURE = 0.7
ANTHROPIC_DEFAULT_MAX_TOKENS = 8192


__all__ = [
    "PROVIDER_IDS",
    "PROVIDERS_WITHOUT_API_KEYS",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "GEMINI_DEFAULT_BASE_URL",
    "GROQ_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_REFERER",
    "OPENROUTER_DEFAULT_TITLE",
    "OLLAMA_DEFAULT_BASE_URL",
    "LMSTUDIO_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "GROQ_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
]
