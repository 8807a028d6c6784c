"""optimaizer_providers.config.env
===============================

Centralized environment variable mapping for provider credentials.

Purpose
-------
- Single source of truth mapping provider ids to their API key variables
  (canonical plus aliases).
- Small lookup helpers used by the layered config in ``config/__init__``.

Design Notes
------------
- Google keys historically live in either ``GEMINI_API_KEY`` or
  ``GOOGLE_API_KEY``; ``ENV_ALIASES`` lists both, canonical first.
- Values that look like placeholders (``changeme``, ``your-key-here``...) are
  treated as unset so a copied sample ``.env`` never reaches a vendor.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and the caller decides.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GEMINI_API_KEY",
    "groq": "GROQ_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}

# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder rather than a real key.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme``,
    ``example`` or ``your-``/``your_``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or "your-" in v
        or "your_" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first real key found, else ``(None, None)``."""
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and val.strip() and not is_placeholder(val):
            return val.strip(), name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
