"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from mukhymat_pricing.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_quote(
    request_id: str,
    camp_id: str,
    total: float,
    currency: str,
    duration_ms: float,
) -> None:
    """Log structured quote outcome for analysis"""
    logging.info(
        "Quote completed",
        extra={
            "request_id": request_id,
            "camp_id": camp_id,
            "step": "quote_complete",
            "total": total,
            "currency": currency,
            "duration_ms": duration_ms,
        },
    )


def log_cancellation(
    request_id: str,
    booking_id: str,
    initiated_by: str,
    refund_amount: float,
    refund_percentage: int,
    duration_ms: float,
    penalty_percentage: Optional[int] = None,
) -> None:
    """Log structured cancellation outcome for analysis"""
    logging.info(
        "Cancellation completed",
        extra={
            "request_id": request_id,
            "booking_id": booking_id,
            "step": "cancellation_complete",
            "initiated_by": initiated_by,
            "refund_amount": refund_amount,
            "refund_percentage": refund_percentage,
            "penalty_percentage": penalty_percentage,
            "duration_ms": duration_ms,
        },
    )
