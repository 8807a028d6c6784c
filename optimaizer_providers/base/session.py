"""
Call lifecycle shared by all adapters: one non-streaming exchange and one
streaming session.

Purpose
-------
Adapters build a ``VendorRequest`` (and, when optional features are present,
a downgrade builder) and hand it here. This module owns everything that is
identical across vendors:

- composing the caller's token with the fixed request deadline
- the one-shot feature downgrade
- mapping non-2xx responses to ``"<Vendor> API error (<status>): <body>"``
- structured ``chat.*`` / ``stream.*`` log events
- releasing the HTTP response on every exit path

Failure modes
-------------
``execute_json_request`` raises ``ProviderError`` (vendor/transport/decode
failure or deadline) or ``CancelledError`` (caller abort).
``stream_chat_session`` never raises for those cases: failures become the
terminal ``error`` chunk and a caller abort ends the stream silently.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Iterable, Optional

import httpx

from .cancellation import CancellationToken, CancelledError, request_scope
from .errors import ErrorCode, ProviderError, classify_exception, vendor_error_message, vendor_http_error
from .http.client import get_async_client
from .http.exchange import VendorRequest, read_error_text, send_request
from .logging import LogContext, normalized_log_event
from .models import StreamChunk
from .resilience.fallback import send_with_feature_fallback
from .streaming.decoding import NO_RESPONSE_BODY, Framing, Translator, run_event_stream
from .timeouts import get_timeout_config


@dataclass(frozen=True)
class FeatureFallback:
    """How to downgrade a request the vendor rejected for an optional feature.

    Attributes:
        downgrade: Builds the feature-free request.
        keywords: Case-insensitive body substrings marking a soft rejection.
        max_status: Exclusive upper status bound (``None``: any ``>= 400``).
    """

    downgrade: Callable[[], VendorRequest]
    keywords: Iterable[str]
    max_status: Optional[int] = 500


@dataclass(frozen=True)
class CallContext:
    """Per-call identity: who is calling which vendor with which client."""

    provider: str
    vendor: str
    model: str
    logger: logging.Logger
    http_client: Optional[httpx.AsyncClient] = None
    purpose: str = "chat"

    def client(self) -> httpx.AsyncClient:
        """Injected client when given, else the pooled one for the running loop."""
        if self.http_client is not None:
            return self.http_client
        return get_async_client(None, self.purpose)

    @property
    def log_ctx(self) -> LogContext:
        return LogContext(provider=self.provider, model=self.model)

    def timeout_message(self, seconds: float) -> str:
        return f"{self.vendor} request timed out after {seconds:g}s"


def _caller_cancelled(cancel_token: Optional[CancellationToken]) -> bool:
    return cancel_token is not None and cancel_token.cancelled


async def _send(
    call: CallContext,
    request: VendorRequest,
    token: CancellationToken,
    fallback: Optional[FeatureFallback],
    *,
    stream: bool,
) -> httpx.Response:
    async def _attempt(req: VendorRequest) -> httpx.Response:
        return await send_request(call.client(), req, token, stream=stream)

    return await send_with_feature_fallback(
        _attempt,
        request,
        downgrade=fallback.downgrade if fallback else None,
        keywords=fallback.keywords if fallback else (),
        max_status=fallback.max_status if fallback else 500,
        logger=call.logger,
        ctx=call.log_ctx,
    )


async def execute_json_request(
    call: CallContext,
    request: VendorRequest,
    *,
    cancel_token: Optional[CancellationToken] = None,
    fallback: Optional[FeatureFallback] = None,
) -> Any:
    """Perform one non-streaming exchange and return the decoded JSON body."""
    ctx = call.log_ctx
    timeout = get_timeout_config().request_timeout_seconds
    started = time.perf_counter()
    normalized_log_event(call.logger, "chat.start", ctx, phase="start", attempt=1)
    try:
        with request_scope(cancel_token, timeout) as token:
            try:
                response = await _send(call, request, token, fallback, stream=False)
            except CancelledError:
                if token.timed_out and not _caller_cancelled(cancel_token):
                    raise ProviderError(
                        code=ErrorCode.TIMEOUT,
                        message=call.timeout_message(timeout),
                        provider=call.provider,
                        model=call.model,
                        retryable=True,
                    ) from None
                raise
        if not response.is_success:
            body = await read_error_text(response)
            raise vendor_http_error(call.vendor, call.provider, response.status_code, body, model=call.model)
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.DECODE,
                message=f"{call.vendor} API returned invalid JSON",
                provider=call.provider,
                model=call.model,
                status=response.status_code,
                raw=exc,
            ) from exc
    except CancelledError:
        normalized_log_event(
            call.logger, "chat.cancelled", ctx, phase="cancelled", error_code=ErrorCode.CANCELLED.value, emitted=False
        )
        raise
    except ProviderError as err:
        normalized_log_event(
            call.logger, "chat.error", ctx, phase="error", error_code=err.code.value, emitted=False, status=err.status
        )
        raise
    except httpx.HTTPError as exc:
        code = classify_exception(exc)
        normalized_log_event(call.logger, "chat.error", ctx, phase="error", error_code=code.value, emitted=False)
        raise ProviderError(
            code=code,
            message=f"{call.vendor} request failed: {exc}",
            provider=call.provider,
            model=call.model,
            raw=exc,
        ) from exc
    normalized_log_event(
        call.logger,
        "chat.end",
        ctx,
        phase="finalize",
        emitted=True,
        latency_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return data


async def stream_chat_session(  # noqa: PLR0913
    call: CallContext,
    request: VendorRequest,
    translate: Translator,
    *,
    framing: Framing = "sse",
    cancel_token: Optional[CancellationToken] = None,
    fallback: Optional[FeatureFallback] = None,
) -> AsyncIterator[StreamChunk]:
    """Open a streaming exchange and yield uniform chunks."""
    ctx = call.log_ctx
    timeout = get_timeout_config().request_timeout_seconds
    timeout_message = call.timeout_message(timeout)
    normalized_log_event(call.logger, "stream.start", ctx, phase="start", attempt=1)
    with request_scope(cancel_token, timeout) as token:
        try:
            response = await _send(call, request, token, fallback, stream=True)
        except CancelledError:
            if token.timed_out and not _caller_cancelled(cancel_token):
                yield StreamChunk.failure(timeout_message)
            else:
                normalized_log_event(
                    call.logger,
                    "stream.cancelled",
                    ctx,
                    phase="cancelled",
                    error_code=ErrorCode.CANCELLED.value,
                    emitted=False,
                )
            return
        except httpx.HTTPError as exc:
            code = classify_exception(exc)
            normalized_log_event(call.logger, "stream.error", ctx, phase="error", error_code=code.value, emitted=False)
            yield StreamChunk.failure(f"{call.vendor} request failed: {exc}")
            return

        if not response.is_success:
            body = await read_error_text(response)
            normalized_log_event(
                call.logger,
                "stream.error",
                ctx,
                phase="error",
                error_code=str(response.status_code),
                emitted=False,
            )
            yield StreamChunk.failure(vendor_error_message(call.vendor, response.status_code, body))
            return
        if response.status_code == 204:
            await response.aclose()
            yield StreamChunk.failure(NO_RESPONSE_BODY)
            return

        events = run_event_stream(
            response,
            translate,
            framing=framing,
            cancel_token=token,
            timeout_message=timeout_message,
            logger=call.logger,
            ctx=ctx,
        )
        try:
            async for chunk in events:
                yield chunk
        finally:
            # an abandoned consumer must still release the response now
            await events.aclose()


__all__ = ["FeatureFallback", "CallContext", "execute_json_request", "stream_chat_session"]
