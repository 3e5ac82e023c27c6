"""POST /v1/quotes, GET /v1/quotes/{quote_id} - booking price breakdown"""

import time
import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from mukhymat_pricing.api.v1.schemas import QuoteRequest, QuoteResponse
from mukhymat_pricing.api.dependencies import get_request_id
from mukhymat_pricing.config import settings
from mukhymat_pricing.infrastructure.database.session import get_db
from mukhymat_pricing.infrastructure.database.repositories import QuoteRepository
from mukhymat_pricing.domain.pricing import calculate_price_breakdown, bhd_to_fils, format_price
from mukhymat_pricing.infrastructure.observability.metrics import record_quote
from mukhymat_pricing.infrastructure.observability.logging import log_quote

router = APIRouter()


@router.post("/quotes", response_model=QuoteResponse)
def create_quote(
    request_body: QuoteRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Price a stay and store the quote the guest will be charged.

    Service fee, tax percentage and currency fall back to the configured
    marketplace defaults when the request omits them.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    service_fee_percentage = (
        request_body.service_fee_percentage
        if request_body.service_fee_percentage is not None
        else settings.default_service_fee_percentage
    )
    tax_percentage = (
        request_body.tax_percentage
        if request_body.tax_percentage is not None
        else settings.default_tax_percentage
    )
    currency = (request_body.currency or settings.default_currency).upper()

    try:
        breakdown = calculate_price_breakdown(
            request_body.price_per_night,
            request_body.nights,
            request_body.guests,
            service_fee_percentage=service_fee_percentage,
            tax_percentage=tax_percentage,
            currency=currency,
        )
        total_fils = bhd_to_fils(breakdown.total)

        quote_repo = QuoteRepository(db)
        db_quote = quote_repo.create_quote(
            camp_id=request_body.camp_id,
            price_per_night=request_body.price_per_night,
            nights=request_body.nights,
            guests=request_body.guests,
            service_fee_percentage=service_fee_percentage,
            tax_percentage=tax_percentage,
            breakdown=breakdown,
            total_fils=total_fils,
        )
        db.commit()

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_quote(breakdown.total)
    log_quote(request_id, request_body.camp_id, breakdown.total, breakdown.currency, duration_ms)

    return QuoteResponse(
        quote_id=str(db_quote.id),
        camp_id=request_body.camp_id,
        camp_price=breakdown.camp_price,
        service_fee=breakdown.service_fee,
        taxes=breakdown.taxes,
        total=breakdown.total,
        total_fils=total_fils,
        currency=breakdown.currency,
        formatted_total=format_price(breakdown.total, breakdown.currency),
    )


@router.get("/quotes/{quote_id}", response_model=QuoteResponse)
def get_quote(quote_id: str, db: Session = Depends(get_db)):
    """Retrieve a stored quote"""
    try:
        quote_uuid = uuid.UUID(quote_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid quote ID format")

    quote_repo = QuoteRepository(db)
    quote = quote_repo.get_quote_by_id(quote_uuid)

    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")

    return QuoteResponse(
        quote_id=str(quote.id),
        camp_id=quote.camp_id,
        camp_price=quote.camp_price,
        service_fee=quote.service_fee,
        taxes=quote.taxes,
        total=quote.total,
        total_fils=quote.total_fils,
        currency=quote.currency,
        formatted_total=format_price(quote.total, quote.currency),
        created_at=quote.created_at.isoformat(),
    )
