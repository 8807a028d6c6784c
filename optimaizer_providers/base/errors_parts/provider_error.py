"""
Structured provider error exception type.

Carries the vendor-facing message (``"<Vendor> API error (<status>): <body>"``)
together with a normalized ``ErrorCode`` so callers can branch without parsing
strings.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message; already embeds vendor status/body.
        provider: Provider id where the error originated (e.g. ``"openai"``).
        model: Optional model name associated with the failure.
        status: HTTP status returned by the vendor, when there was one.
        retryable: Hint for upstream policy (this layer never loops).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status: Optional[int] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        return self.message


__all__ = ["ProviderError"]
