"""Payout ledger webhook client with exponential backoff retry logic"""

import httpx
import asyncio
import logging
from typing import Dict, Any
from mukhymat_pricing.config import settings
from mukhymat_pricing.domain.exceptions import LedgerDeliveryError
from mukhymat_pricing.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter

logger = logging.getLogger(__name__)


class LedgerClient:
    """Client for reporting guest refunds and host penalties to the payout ledger"""

    def __init__(self, webhook_url: str | None = None, timeout: float | None = None):
        self.webhook_url = webhook_url or settings.ledger_webhook_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base

    async def send_cancellation_event(self, payload: Dict[str, Any]) -> None:
        """
        Send a cancellation money-movement event to the ledger with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^(attempt-1))
        - Retries on 4xx/5xx responses and network failures
        - Tracks latency histogram and failure counter

        Args:
            payload: Event data (event, cancellation_id, booking_id, amounts)

        Raises:
            LedgerDeliveryError: When every attempt failed
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        logger.error(
                            f"Ledger webhook failed after {attempt} attempts: {e}",
                            extra={"event": payload.get("event"), "booking_id": payload.get("booking_id")},
                        )
                        raise LedgerDeliveryError(
                            f"Ledger webhook failed after {attempt} attempts"
                        ) from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)
