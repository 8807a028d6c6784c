"""Unified timeout configuration for providers.

This module centralizes the timeout values used by adapters and the HTTP
pool so no adapter hard-codes its own numbers.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the relevant variables change). Supported
    environment variables (all optional):
        PT_TIMEOUT_REQUEST_SECONDS   upper bound for one chat/stream call
        PT_TIMEOUT_CONNECT_SECONDS
        PT_TIMEOUT_HTTP_SECONDS      per read/write inactivity bound

Failure Modes
-------------
Invalid or non-positive values fall back to the defaults, except
``PT_TIMEOUT_REQUEST_SECONDS`` where ``0`` (or a negative number) disables
the request deadline entirely.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        request_timeout_seconds: Upper bound for a whole chat or stream call,
            composed with the caller's cancellation token. ``0`` disables it.
        connect_timeout_seconds: TCP/TLS connect bound for pooled clients.
        http_timeout_seconds: Read/write inactivity bound for pooled clients.
    """

    request_timeout_seconds: float = 90.0
    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0

    def as_httpx(self) -> httpx.Timeout:
        """Render the pool-level bounds as an ``httpx.Timeout``."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = ("PT_TIMEOUT_REQUEST_SECONDS", "PT_TIMEOUT_CONNECT_SECONDS", "PT_TIMEOUT_HTTP_SECONDS")


def _parse_env_float(name: str, default: float, *, allow_disable: bool = False) -> float:
    """Parse an environment variable as a float with a fallback default.

    Non-positive values return ``default`` unless ``allow_disable`` is set, in
    which case they normalize to ``0.0`` (disabled).
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    if val > 0:
        return val
    return 0.0 if allow_disable else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig`` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        request_timeout_seconds=_parse_env_float(
            "PT_TIMEOUT_REQUEST_SECONDS", defaults.request_timeout_seconds, allow_disable=True
        ),
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
