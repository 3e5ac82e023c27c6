"""GET /v1/cancellations/history - Fetch a booking's cancellation history"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mukhymat_pricing.api.v1.schemas import CancellationHistoryResponse, CancellationHistoryItem
from mukhymat_pricing.infrastructure.database.session import get_db
from mukhymat_pricing.infrastructure.database.repositories import CancellationRepository

router = APIRouter()


@router.get("/cancellations/history", response_model=CancellationHistoryResponse)
def get_cancellation_history(
    booking_id: str = Query(..., description="Booking identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent cancellation outcomes for a booking.

    Returns:
        Guest and host cancellations with refund and penalty figures
    """
    cancellation_repo = CancellationRepository(db)
    cancellations = cancellation_repo.get_cancellations_by_booking(booking_id, limit=20)

    history_items = [
        CancellationHistoryItem(
            cancellation_id=str(c.id),
            initiated_by=c.initiated_by,
            policy=c.policy,
            total_amount=c.total_amount,
            refund_amount=c.refund_amount,
            refund_percentage=c.refund_percentage,
            penalty_amount=c.penalty_amount,
            penalty_percentage=c.penalty_percentage,
            message=c.message,
            created_at=c.created_at.isoformat(),
        )
        for c in cancellations
    ]

    return CancellationHistoryResponse(booking_id=booking_id, cancellations=history_items)
