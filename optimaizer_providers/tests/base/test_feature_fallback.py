"""One-shot optional-feature downgrade."""

from __future__ import annotations

from typing import List

import httpx
import pytest

from optimaizer_providers.base.http.exchange import VendorRequest
from optimaizer_providers.base.logging import get_logger
from optimaizer_providers.base.resilience import is_feature_rejection, send_with_feature_fallback


@pytest.mark.parametrize(
    "status, body, max_status, expected",
    [
        (400, "Tool not supported", 500, True),
        (422, "UNSUPPORTED parameter", 500, True),
        (400, "bad request", 500, False),
        (500, "tool crashed", 500, False),
        (500, "tool crashed", None, True),
        (399, "tool", 500, False),
        (200, "tool", None, False),
    ],
)
def test_is_feature_rejection(status, body, max_status, expected):
    assert is_feature_rejection(status, body, ("tool", "unsupported"), max_status=max_status) is expected


def _request(body):
    return VendorRequest(url="https://vendor.test/chat", body=body)


@pytest.mark.asyncio
async def test_soft_rejection_is_retried_exactly_once(provider_events):
    sent: List[VendorRequest] = []
    responses = [httpx.Response(400, text="tool unsupported"), httpx.Response(400, text="tool unsupported again")]

    async def send(req: VendorRequest) -> httpx.Response:
        sent.append(req)
        return responses[len(sent) - 1]

    original = _request({"model": "m", "tools": [1]})
    final = await send_with_feature_fallback(
        send,
        original,
        downgrade=lambda: original.without("tools"),
        keywords=("tool",),
        logger=get_logger("providers.test"),
    )
    assert len(sent) == 2
    assert "tools" not in sent[1].body
    assert final.status_code == 400
    assert final.text == "tool unsupported again"
    (retry,) = provider_events.named("fallback.retry")
    assert retry["attempt"] == 2
    assert retry["error_code"] == "400"


@pytest.mark.asyncio
async def test_non_matching_failure_is_not_retried():
    sent: List[VendorRequest] = []

    async def send(req: VendorRequest) -> httpx.Response:
        sent.append(req)
        return httpx.Response(401, text="invalid key")

    original = _request({"tools": [1]})
    final = await send_with_feature_fallback(
        send, original, downgrade=lambda: original.without("tools"), keywords=("tool",)
    )
    assert len(sent) == 1
    assert final.status_code == 401


@pytest.mark.asyncio
async def test_without_downgrade_first_response_is_returned():
    calls = []

    async def send(req: VendorRequest) -> httpx.Response:
        calls.append(req)
        return httpx.Response(400, text="tool")

    final = await send_with_feature_fallback(send, _request({}), downgrade=None, keywords=("tool",))
    assert len(calls) == 1
    assert final.status_code == 400
