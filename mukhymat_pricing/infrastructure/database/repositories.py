"""Data access layer for quotes and cancellations"""

import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from mukhymat_pricing.infrastructure.database.models import BookingQuote, BookingCancellation
from mukhymat_pricing.domain.models import PriceBreakdown, RefundCalculation, HostPenalty


class QuoteRepository:
    """Repository for booking quotes"""

    def __init__(self, db: Session):
        self.db = db

    def create_quote(
        self,
        camp_id: str,
        price_per_night: float,
        nights: int,
        guests: int,
        service_fee_percentage: float,
        tax_percentage: float,
        breakdown: PriceBreakdown,
        total_fils: int,
    ) -> BookingQuote:
        """Persist quote to database"""
        db_quote = BookingQuote(
            camp_id=camp_id,
            price_per_night=price_per_night,
            nights=nights,
            guests=guests,
            service_fee_percentage=service_fee_percentage,
            tax_percentage=tax_percentage,
            camp_price=breakdown.camp_price,
            service_fee=breakdown.service_fee,
            taxes=breakdown.taxes,
            total=breakdown.total,
            total_fils=total_fils,
            currency=breakdown.currency,
        )
        self.db.add(db_quote)
        self.db.flush()  # Get ID without committing
        return db_quote

    def get_quote_by_id(self, quote_id: uuid.UUID) -> Optional[BookingQuote]:
        return (
            self.db.query(BookingQuote)
            .filter(BookingQuote.id == quote_id)
            .first()
        )


class CancellationRepository:
    """Repository for cancellation outcomes"""

    def __init__(self, db: Session):
        self.db = db

    def create_cancellation(
        self,
        booking_id: str,
        initiated_by: str,
        total_amount: float,
        check_in: datetime,
        cancelled_at: datetime,
        refund: RefundCalculation,
        policy: Optional[str] = None,
        penalty: Optional[HostPenalty] = None,
    ) -> BookingCancellation:
        """Persist cancellation outcome; penalty only for host cancellations"""
        db_cancellation = BookingCancellation(
            booking_id=booking_id,
            initiated_by=initiated_by,
            policy=policy,
            total_amount=total_amount,
            check_in=check_in,
            cancelled_at=cancelled_at,
            refund_amount=refund.refund_amount,
            refund_percentage=refund.refund_percentage,
            service_fee=refund.service_fee,
            penalty_amount=penalty.penalty_amount if penalty else None,
            penalty_percentage=penalty.penalty_percentage if penalty else None,
            message=penalty.message if penalty else refund.message,
        )
        self.db.add(db_cancellation)
        self.db.flush()
        return db_cancellation

    def get_cancellations_by_booking(self, booking_id: str, limit: int = 10) -> List[BookingCancellation]:
        """Fetch recent cancellations for a booking"""
        return (
            self.db.query(BookingCancellation)
            .filter(BookingCancellation.booking_id == booking_id)
            .order_by(BookingCancellation.created_at.desc())
            .limit(limit)
            .all()
        )
