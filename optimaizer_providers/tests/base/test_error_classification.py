from __future__ import annotations

import asyncio

import httpx
import pytest

from optimaizer_providers.base.cancellation import CancelledError
from optimaizer_providers.base.errors import (
    ErrorCode,
    MissingApiKeyError,
    ProviderError,
    classify_exception,
    classify_status,
    truncate_error_text,
    vendor_error_message,
    vendor_http_error,
)


@pytest.mark.parametrize(
    "status, code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (408, ErrorCode.TIMEOUT),
        (409, ErrorCode.CONFLICT),
        (418, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (None, ErrorCode.UNKNOWN),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code


def test_classify_exception_precedence():
    err = ProviderError(code=ErrorCode.AUTH, message="m", provider="openai")
    assert classify_exception(err) is ErrorCode.AUTH
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT
    assert classify_exception(CancelledError("user")) is ErrorCode.CANCELLED
    assert classify_exception(ValueError("x")) is ErrorCode.UNKNOWN


def test_vendor_error_message_is_truncated():
    body = "x" * 2500
    message = vendor_error_message("OpenAI", 400, body)
    assert message.startswith("OpenAI API error (400): xxx")
    assert message.endswith("... [truncated 500 chars]")
    assert truncate_error_text(None) == ""


def test_vendor_http_error_fields():
    err = vendor_http_error("Groq", "groq", 429, "slow down", model="m")
    assert str(err) == "Groq API error (429): slow down"
    assert err.code is ErrorCode.RATE_LIMIT
    assert err.retryable is True
    assert err.status == 429
    assert err.provider == "groq"


def test_missing_api_key_error_message():
    err = MissingApiKeyError("openai")
    assert isinstance(err, ProviderError)
    assert err.code is ErrorCode.CONFIGURATION
    assert str(err) == (
        "No API key configured for provider: openai. Set it in the .env file or via the settings panel."
    )
