"""POST /v1/refunds/eligibility - Can the guest still get money back, and until when"""

import logging
from fastapi import APIRouter, HTTPException, Request

from mukhymat_pricing.api.v1.schemas import EligibilityRequest, EligibilityResponse
from mukhymat_pricing.api.dependencies import get_request_id
from mukhymat_pricing.config import settings
from mukhymat_pricing.domain.eligibility import check_refund_eligibility, format_refund_deadline
from mukhymat_pricing.domain.exceptions import UnknownPolicyError
from mukhymat_pricing.utils.date_utils import ensure_utc, utc_now

router = APIRouter()


@router.post("/refunds/eligibility", response_model=EligibilityResponse)
def get_refund_eligibility(request_body: EligibilityRequest, request: Request):
    """Preview the refund a guest would get by cancelling at as_of (default now)"""
    as_of = ensure_utc(request_body.as_of) if request_body.as_of else utc_now()

    try:
        eligibility = check_refund_eligibility(
            request_body.total_amount,
            ensure_utc(request_body.check_in),
            request_body.policy or settings.default_cancellation_policy,
            as_of=as_of,
            refundable=request_body.refundable,
            already_refunded=request_body.already_refunded,
        )
    except UnknownPolicyError as e:
        logging.warning(f"Unknown policy: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return EligibilityResponse(
        eligible=eligibility.eligible,
        amount=eligibility.amount,
        percentage=eligibility.percentage,
        reason=eligibility.reason,
        deadline=eligibility.deadline,
        formatted_deadline=format_refund_deadline(eligibility.deadline) if eligibility.deadline else None,
    )
