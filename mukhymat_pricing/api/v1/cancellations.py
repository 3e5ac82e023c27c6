"""POST /v1/cancellations/guest, POST /v1/cancellations/host - refund and penalty calculation"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, BackgroundTasks, Request
from sqlalchemy.orm import Session

from mukhymat_pricing.api.v1.schemas import (
    GuestCancellationRequest,
    GuestCancellationResponse,
    HostCancellationRequest,
    HostCancellationResponse,
    HostPenaltySchema,
    RefundSchema,
)
from mukhymat_pricing.api.dependencies import get_ledger_client, get_request_id
from mukhymat_pricing.config import settings
from mukhymat_pricing.infrastructure.database.session import get_db
from mukhymat_pricing.infrastructure.database.repositories import CancellationRepository
from mukhymat_pricing.infrastructure.clients.ledger import LedgerClient
from mukhymat_pricing.domain.refunds import (
    calculate_refund,
    calculate_host_cancellation_refund,
    calculate_host_penalty,
    is_within_host_penalty_period,
    resolve_policy,
)
from mukhymat_pricing.domain.exceptions import UnknownPolicyError
from mukhymat_pricing.infrastructure.observability.metrics import record_cancellation
from mukhymat_pricing.infrastructure.observability.logging import log_cancellation
from mukhymat_pricing.utils.date_utils import ensure_utc, utc_now

router = APIRouter()


@router.post("/cancellations/guest", response_model=GuestCancellationResponse)
def cancel_as_guest(
    request_body: GuestCancellationRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    ledger_client: LedgerClient = Depends(get_ledger_client),
):
    """
    Calculate the refund for a guest-initiated cancellation.

    Flow:
    1. Resolve policy (request or configured default)
    2. Run the policy engine on total, check-in and cancellation time
    3. Persist the outcome
    4. Report the refund to the payout ledger when there is one
    """
    start_time = time.time()
    request_id = get_request_id(request)
    check_in = ensure_utc(request_body.check_in)
    cancelled_at = ensure_utc(request_body.cancelled_at) if request_body.cancelled_at else utc_now()

    try:
        policy = resolve_policy(request_body.policy or settings.default_cancellation_policy)
        refund = calculate_refund(request_body.total_amount, check_in, cancelled_at, policy)

        cancellation_repo = CancellationRepository(db)
        db_cancellation = cancellation_repo.create_cancellation(
            booking_id=request_body.booking_id,
            initiated_by="guest",
            total_amount=request_body.total_amount,
            check_in=check_in,
            cancelled_at=cancelled_at,
            refund=refund,
            policy=policy.value,
        )
        cancellation_id = str(db_cancellation.id)

        if refund.refund_amount > 0:
            background_tasks.add_task(
                ledger_client.send_cancellation_event,
                {
                    "event": "GUEST_CANCELLATION_REFUND",
                    "cancellation_id": cancellation_id,
                    "booking_id": request_body.booking_id,
                    "refund_amount": refund.refund_amount,
                    "service_fee_retained": refund.service_fee,
                },
            )

        db.commit()

    except UnknownPolicyError as e:
        db.rollback()
        logging.warning(f"Unknown policy: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_cancellation("guest", policy.value, refund.refund_percentage)
    log_cancellation(
        request_id,
        request_body.booking_id,
        "guest",
        refund.refund_amount,
        refund.refund_percentage,
        duration_ms,
    )

    return GuestCancellationResponse(
        cancellation_id=cancellation_id,
        booking_id=request_body.booking_id,
        policy=policy,
        refund=RefundSchema(**asdict(refund)),
    )


@router.post("/cancellations/host", response_model=HostCancellationResponse)
def cancel_as_host(
    request_body: HostCancellationRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    ledger_client: LedgerClient = Depends(get_ledger_client),
):
    """
    Calculate guest refund and host penalty for a host-initiated cancellation.

    The guest always gets the full amount back (service fee waived); the host
    is penalised on their payout by lead time.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    check_in = ensure_utc(request_body.check_in)
    cancelled_at = ensure_utc(request_body.cancelled_at) if request_body.cancelled_at else utc_now()

    try:
        guest_refund = calculate_host_cancellation_refund(request_body.total_amount)
        penalty = calculate_host_penalty(request_body.total_amount, check_in, cancelled_at)
        within_penalty_period = is_within_host_penalty_period(check_in, cancelled_at)

        cancellation_repo = CancellationRepository(db)
        db_cancellation = cancellation_repo.create_cancellation(
            booking_id=request_body.booking_id,
            initiated_by="host",
            total_amount=request_body.total_amount,
            check_in=check_in,
            cancelled_at=cancelled_at,
            refund=guest_refund,
            penalty=penalty,
        )
        cancellation_id = str(db_cancellation.id)

        if guest_refund.refund_amount > 0 or penalty.penalty_amount > 0:
            background_tasks.add_task(
                ledger_client.send_cancellation_event,
                {
                    "event": "HOST_CANCELLATION",
                    "cancellation_id": cancellation_id,
                    "booking_id": request_body.booking_id,
                    "refund_amount": guest_refund.refund_amount,
                    "host_penalty_amount": penalty.penalty_amount,
                },
            )

        db.commit()

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_cancellation("host", None, guest_refund.refund_percentage, penalty.penalty_percentage)
    log_cancellation(
        request_id,
        request_body.booking_id,
        "host",
        guest_refund.refund_amount,
        guest_refund.refund_percentage,
        duration_ms,
        penalty_percentage=penalty.penalty_percentage,
    )

    return HostCancellationResponse(
        cancellation_id=cancellation_id,
        booking_id=request_body.booking_id,
        guest_refund=RefundSchema(**asdict(guest_refund)),
        host_penalty=HostPenaltySchema(**asdict(penalty)),
        within_penalty_period=within_penalty_period,
    )
