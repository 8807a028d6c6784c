"""One-shot optional-feature downgrade for vendor requests.

Purpose
-------
A vendor may reject an optional add-on (built-in tools, plugins, prompt
caching) for a given model. When the first attempt fails with a status in the
soft range and the body mentions one of the vendor's feature keywords, the
request is rebuilt without those features and sent exactly once more.

External dependencies
---------------------
- ``httpx`` response objects; the actual send is injected by the caller.

Fallback semantics
------------------
- Never more than two attempts. There is no loop and no backoff.
- The keyword test is a case-insensitive substring match. It is approximate
  on purpose and must stay that way to keep retry behaviour stable.
- The function returns the final ``httpx.Response`` (2xx or not); mapping a
  failure to an error is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable, Optional

import httpx

from ..http.exchange import VendorRequest, read_error_text
from ..logging import LogContext, normalized_log_event


def is_feature_rejection(
    status: int,
    body: Optional[str],
    keywords: Iterable[str],
    *,
    max_status: Optional[int] = 500,
) -> bool:
    """Return True when ``status``/``body`` look like an optional-feature rejection.

    ``status`` must be ``>= 400`` and below ``max_status`` (``None`` removes
    the upper bound).
    """
    if status < 400 or (max_status is not None and status >= max_status):
        return False
    normalized = (body or "").lower()
    return any(keyword.lower() in normalized for keyword in keywords)


async def send_with_feature_fallback(
    send: Callable[[VendorRequest], Awaitable[httpx.Response]],
    request: VendorRequest,
    *,
    downgrade: Optional[Callable[[], VendorRequest]],
    keywords: Iterable[str],
    max_status: Optional[int] = 500,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> httpx.Response:
    """Send ``request``; on a soft rejection send ``downgrade()`` once.

    ``downgrade`` is ``None`` when the request carries no optional feature, in
    which case the first response is returned as is.
    """
    response = await send(request)
    if response.is_success or downgrade is None:
        return response
    body = await read_error_text(response)
    if not is_feature_rejection(response.status_code, body, keywords, max_status=max_status):
        return response
    if logger is not None:
        normalized_log_event(
            logger,
            "fallback.retry",
            ctx,
            phase="fallback",
            attempt=2,
            error_code=str(response.status_code),
            emitted=False,
        )
    return await send(downgrade())


__all__ = ["is_feature_rejection", "send_with_feature_fallback"]
