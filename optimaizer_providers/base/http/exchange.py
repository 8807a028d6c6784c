"""Cancellable request primitives used by every adapter.

``VendorRequest`` is an immutable description of one POST (URL, headers,
JSON body, query params). ``send_request`` performs it while racing the
cancellation token, so an abort interrupts connect/handshake as well as the
body read.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ..cancellation import CancellationToken, await_cancellable


@dataclass(frozen=True)
class VendorRequest:
    """One vendor POST. ``body`` is serialized as JSON."""

    url: str
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, str]] = None

    def without(self, *keys: str) -> "VendorRequest":
        """Return a copy whose body lacks ``keys`` (missing keys are ignored)."""
        return dataclasses.replace(self, body={k: v for k, v in self.body.items() if k not in keys})

    def replace(self, **changes: Any) -> "VendorRequest":
        return dataclasses.replace(self, **changes)


async def send_request(
    client: httpx.AsyncClient,
    request: VendorRequest,
    cancel_token: Optional[CancellationToken] = None,
    *,
    stream: bool = False,
) -> httpx.Response:
    """POST ``request``; with ``stream=True`` the body is left unread.

    Raises:
        CancelledError: the token fired before headers arrived.
        httpx.HTTPError: transport failure.
    """
    http_request = client.build_request(
        "POST",
        request.url,
        json=request.body,
        headers={"Content-Type": "application/json", **request.headers},
        params=request.params,
    )
    return await await_cancellable(client.send(http_request, stream=stream), cancel_token)


async def read_error_text(response: httpx.Response) -> str:
    """Read (and release) a failed response body, returning it as text."""
    await response.aread()
    return response.text


__all__ = ["VendorRequest", "send_request", "read_error_text"]
