"""Unified provider error taxonomy public surface.

Re-exports the implementations under ``optimaizer_providers.base.errors_parts``
and hosts the small helpers every adapter uses to turn a failed vendor
response into a ``ProviderError``.
"""
from __future__ import annotations

from typing import Optional

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.configuration_error import MissingApiKeyError
from .errors_parts.classification import classify_exception, classify_status, is_retryable

# Vendor error bodies can be arbitrarily large HTML pages; keep messages bounded.
MAX_ERROR_BODY_CHARS = 2000


def truncate_error_text(text: Optional[str], limit: int = MAX_ERROR_BODY_CHARS) -> str:
    """Return ``text`` bounded to ``limit`` characters with an ellipsis marker."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [truncated {len(text) - limit} chars]"


def vendor_error_message(vendor: str, status: int, body: Optional[str]) -> str:
    """Format the canonical ``"<Vendor> API error (<status>): <body>"`` message."""
    return f"{vendor} API error ({status}): {truncate_error_text(body)}"


def vendor_http_error(
    vendor: str,
    provider: str,
    status: int,
    body: Optional[str],
    *,
    model: Optional[str] = None,
) -> ProviderError:
    """Build a ``ProviderError`` for a non-2xx vendor response."""
    code = classify_status(status)
    return ProviderError(
        code=code,
        message=vendor_error_message(vendor, status, body),
        provider=provider,
        model=model,
        status=status,
        retryable=is_retryable(code),
    )


__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingApiKeyError",
    "classify_exception",
    "classify_status",
    "is_retryable",
    "MAX_ERROR_BODY_CHARS",
    "truncate_error_text",
    "vendor_error_message",
    "vendor_http_error",
]
