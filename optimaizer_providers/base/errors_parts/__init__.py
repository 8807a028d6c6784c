"""Errors parts package public surface.

Prefer importing from ``optimaizer_providers.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .configuration_error import MissingApiKeyError
from .classification import classify_exception, classify_status, is_retryable

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingApiKeyError",
    "classify_exception",
    "classify_status",
    "is_retryable",
]
