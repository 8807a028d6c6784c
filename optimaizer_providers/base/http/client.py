"""Shared async HTTP client pool for providers.

Purpose:
    Provide reusable ``httpx.AsyncClient`` instances so adapters do not pay a
    TLS handshake per call. Timeouts derive from :func:`get_timeout_config`;
    no numeric literals live here.

External dependencies:
    - ``httpx`` for the underlying async HTTP client.

Timeout strategy:
    - Pool clients carry connect and read/write bounds from
      ``TimeoutConfig.as_httpx()``. The whole-call upper bound is enforced by
      the adapters through ``request_scope``.

Lifecycle & cleanup:
    - An ``AsyncClient`` is bound to the event loop that first used it, so
      clients are cached by ``(base_url, purpose, loop)``.
    - ``close_all_clients()`` is a coroutine; applications call it on
      shutdown and tests in teardown.
    - ``set_transport_override`` swaps the transport used for new clients
      (tests pass an ``httpx.MockTransport``) and drops the current pool.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Dict, List, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str, int], httpx.AsyncClient] = {}
_LOCK = threading.RLock()
_TRANSPORT_OVERRIDE: Optional[httpx.AsyncBaseTransport] = None


def get_async_client(base_url: Optional[str] = None, purpose: str = "chat") -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the running loop.

    Parameters:
        base_url: Optional base URL set on the client; ``None`` groups
            absolute-URL callers under one key.
        purpose: Short discriminator for separate pools (``"chat"``,
            ``"stream"``). Keep stable to maximize reuse.
    """
    loop_id = id(asyncio.get_running_loop())
    key = (base_url, purpose, loop_id)
    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        kwargs = {"timeout": get_timeout_config().as_httpx()}
        if base_url:
            kwargs["base_url"] = base_url
        if _TRANSPORT_OVERRIDE is not None:
            kwargs["transport"] = _TRANSPORT_OVERRIDE
        client = httpx.AsyncClient(**kwargs)
        _CLIENTS[key] = client
        return client


def set_transport_override(transport: Optional[httpx.AsyncBaseTransport]) -> None:
    """Route newly created pool clients through ``transport`` (``None`` resets).

    Existing clients are forgotten; callers still owning one keep using it.
    """
    global _TRANSPORT_OVERRIDE  # noqa: PLW0603 - module-level pool config
    with _LOCK:
        _TRANSPORT_OVERRIDE = transport
        _CLIENTS.clear()


async def close_all_clients() -> None:
    """Close and clear pooled clients belonging to the running loop."""
    loop_id = id(asyncio.get_running_loop())
    with _LOCK:
        owned: List[httpx.AsyncClient] = [c for k, c in _CLIENTS.items() if k[2] == loop_id]
        for key in [k for k in _CLIENTS if k[2] == loop_id]:
            del _CLIENTS[key]
    for client in owned:
        await client.aclose()


__all__ = ["get_async_client", "set_transport_override", "close_all_clients"]
