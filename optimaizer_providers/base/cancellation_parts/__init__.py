"""Cancellation parts; import from ``optimaizer_providers.base.cancellation``."""

from .cancelled_error import CancelledError
from .cancellation_token import CancellationToken, TIMEOUT_REASON
from .scoped import await_cancellable, request_scope

__all__ = ["CancellationToken", "CancelledError", "TIMEOUT_REASON", "await_cancellable", "request_scope"]
