"""OpenRouter API key normalization and validation.

Keys pasted into settings often arrive quoted or with a ``Bearer`` prefix.
They are normalized first, then checked against the OpenRouter key shape. A
key that matches another vendor's shape gets a targeted message so the user
knows which key they configured by mistake.
"""
from __future__ import annotations

import re
from typing import Optional

_WRAPPED_BY_QUOTE = re.compile(r"^(['\"`])(.*)\1$", re.DOTALL)
_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)

OPENROUTER_KEY_PATTERN = re.compile(r"^(?:sk-or-v1-|or-)[A-Za-z0-9_\-]{12,}$")

_EXPECTED = 'Add an OpenRouter key that starts with "sk-or-v1-".'

# Checked in order; the first match names the misconfigured vendor.
_FOREIGN_KEY_PATTERNS = (
    (re.compile(r"^AIza[0-9A-Za-z\-_]{20,}$"), "a Google API key (AIza...)"),
    (re.compile(r"^gsk_[A-Za-z0-9_\-]{12,}$"), "a Groq API key (gsk_...)"),
    (re.compile(r"^sk-ant-[A-Za-z0-9_\-]{12,}$"), "an Anthropic key (sk-ant-...)"),
    (re.compile(r"^sk-(?:proj-)?[A-Za-z0-9_\-]{12,}$"), "an OpenAI key (sk-...)"),
)


def normalize_openrouter_api_key(raw_key: Optional[str]) -> str:
    """Trim, unquote and strip a ``Bearer`` prefix from ``raw_key``."""
    trimmed = (raw_key or "").strip()
    match = _WRAPPED_BY_QUOTE.match(trimmed)
    unquoted = match.group(2).strip() if match else trimmed
    return _BEARER_PREFIX.sub("", unquoted, count=1).strip()


def openrouter_api_key_error(raw_key: Optional[str]) -> Optional[str]:
    """Return a user-facing problem description, or ``None`` for a usable key."""
    api_key = normalize_openrouter_api_key(raw_key)
    if not api_key:
        return "No OpenRouter API key configured."
    if OPENROUTER_KEY_PATTERN.match(api_key):
        return None
    for pattern, looks_like in _FOREIGN_KEY_PATTERNS:
        if pattern.match(api_key):
            return f"Configured OpenRouter key looks like {looks_like}. {_EXPECTED}"
    return 'Invalid OpenRouter API key format. Expected "sk-or-v1-..." (or legacy "or-...").'


__all__ = ["OPENROUTER_KEY_PATTERN", "normalize_openrouter_api_key", "openrouter_api_key_error"]
