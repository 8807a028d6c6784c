"""Pytest configuration for the providers test suite.

Every test runs with a clean provider environment: no API keys, no config
file and no ``.env`` pickup from the working directory. HTTP is faked with
``httpx.MockTransport`` through an injected client (see ``utils.mock_client``).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from optimaizer_providers.base.catalog import clear_catalog_cache
from optimaizer_providers.base.logging import get_logger
from optimaizer_providers.config import reset_config_cache

_PROVIDER_ENV = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GROQ_API_KEY",
    "OPENROUTER_API_KEY",
    "OPENAI_BASE_URL",
    "ANTHROPIC_BASE_URL",
    "GOOGLE_BASE_URL",
    "GROQ_BASE_URL",
    "OPENROUTER_BASE_URL",
    "OLLAMA_BASE_URL",
    "LMSTUDIO_BASE_URL",
    "PROVIDERS_CONFIG_FILE",
    "PT_TIMEOUT_REQUEST_SECONDS",
    "PT_TIMEOUT_CONNECT_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolated_provider_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider variables and point the ``.env`` loader at nothing."""
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    clear_catalog_cache()
    yield
    reset_config_cache()
    clear_catalog_cache()


class _EventHandler(logging.Handler):
    """Collect structured provider events as decoded dicts."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        if isinstance(payload, dict):
            self.events.append(payload)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture()
def provider_events() -> Iterator[_EventHandler]:
    """Attach a capturing handler to the shared ``providers`` logger."""
    base = get_logger("providers")
    handler = _EventHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
