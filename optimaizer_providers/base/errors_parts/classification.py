"""
Error classification helpers mapping statuses and exceptions to ``ErrorCode``.

Implements HTTP status mapping for vendor responses and exception
classification for transport failures raised by ``httpx``.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_RETRYABLE = frozenset({ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE})


def classify_status(status: Optional[int]) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unmapped 4xx statuses fall back to ``VALIDATION`` and unmapped 5xx to
    ``SERVER_ERROR``; anything else is ``UNKNOWN``.
    """
    if status is None:
        return ErrorCode.UNKNOWN
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def is_retryable(code: ErrorCode) -> bool:
    """Hint whether a failure class is transient (informational only)."""
    return code in _RETRYABLE


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough; cooperative ``CancelledError`` is ``CANCELLED``.
        2. Timeout exceptions (builtin, asyncio, httpx).
        3. HTTP status carried by ``httpx.HTTPStatusError``.
        4. Other ``httpx`` transport failures are ``TRANSIENT``.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        return classify_status(exc.response.status_code)
    if isinstance(exc, (httpx.TransportError, httpx.StreamError)):
        return ErrorCode.TRANSIENT
    return ErrorCode.UNKNOWN


__all__ = ["classify_status", "classify_exception", "is_retryable"]
