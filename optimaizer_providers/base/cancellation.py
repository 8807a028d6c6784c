"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable, provider-agnostic cancellation constructs via the canonical
``optimaizer_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the cancellation signal callers attach to
  ``ChatParams.cancel_token``.
- ``request_scope`` composes that signal with the fixed request timeout.
- ``CancelledError`` is raised by non-streaming operations that observe a
  caller abort; streams simply stop.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken, TIMEOUT_REASON
from .cancellation_parts.scoped import await_cancellable, request_scope

__all__ = ["CancellationToken", "CancelledError", "TIMEOUT_REASON", "await_cancellable", "request_scope"]
