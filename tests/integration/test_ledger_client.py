"""Tests for the payout ledger webhook client retry behaviour"""

import asyncio
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from mukhymat_pricing.domain.exceptions import LedgerDeliveryError
from mukhymat_pricing.infrastructure.clients.ledger import LedgerClient

WEBHOOK_URL = "http://ledger.test/events"
PAYLOAD = {"event": "GUEST_CANCELLATION_REFUND", "booking_id": "booking_1", "refund_amount": 45.0}


def ledger_response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", WEBHOOK_URL))


@patch("mukhymat_pricing.infrastructure.clients.ledger.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_send_cancellation_event_success(mock_post: AsyncMock, mock_sleep: AsyncMock):
    mock_post.return_value = ledger_response(200)

    asyncio.run(LedgerClient(webhook_url=WEBHOOK_URL).send_cancellation_event(PAYLOAD))

    mock_post.assert_awaited_once()
    assert mock_post.call_args.args[0] == WEBHOOK_URL
    assert mock_post.call_args.kwargs["json"] == PAYLOAD
    mock_sleep.assert_not_awaited()


@patch("mukhymat_pricing.infrastructure.clients.ledger.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_send_cancellation_event_retries_server_errors(mock_post: AsyncMock, mock_sleep: AsyncMock):
    """Test 5xx responses are retried with exponential backoff"""
    mock_post.side_effect = [ledger_response(503), ledger_response(502), ledger_response(200)]

    asyncio.run(LedgerClient(webhook_url=WEBHOOK_URL).send_cancellation_event(PAYLOAD))

    assert mock_post.await_count == 3
    assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 2.0]


@patch("mukhymat_pricing.infrastructure.clients.ledger.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_send_cancellation_event_gives_up(mock_post: AsyncMock, mock_sleep: AsyncMock):
    """Test network failures exhaust retries and raise LedgerDeliveryError"""
    mock_post.side_effect = httpx.ConnectError("connection refused")
    client = LedgerClient(webhook_url=WEBHOOK_URL)
    client.max_retries = 3

    with pytest.raises(LedgerDeliveryError):
        asyncio.run(client.send_cancellation_event(PAYLOAD))

    assert mock_post.await_count == 3
    assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 2.0]
