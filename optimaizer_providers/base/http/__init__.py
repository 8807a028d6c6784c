"""HTTP utilities package for providers.

Exposes pooled ``httpx.AsyncClient`` instances and the cancellable request
primitives.
"""

from .client import close_all_clients, get_async_client, set_transport_override
from .exchange import VendorRequest, read_error_text, send_request

__all__ = [
    "close_all_clients",
    "get_async_client",
    "set_transport_override",
    "VendorRequest",
    "read_error_text",
    "send_request",
]
