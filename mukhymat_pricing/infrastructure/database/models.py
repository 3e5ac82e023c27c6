"""SQLAlchemy ORM models for booking quotes and cancellation outcomes"""

import uuid
from sqlalchemy import Column, String, BigInteger, Float, DateTime, Integer, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class BookingQuote(Base):
    """Price breakdown charged for a booking"""

    __tablename__ = "booking_quote"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    camp_id = Column(Text, nullable=False, index=True)
    price_per_night = Column(Float, nullable=False)
    nights = Column(Integer, nullable=False)
    guests = Column(Integer, nullable=False)
    service_fee_percentage = Column(Float, nullable=False)
    tax_percentage = Column(Float, nullable=False)
    camp_price = Column(Float, nullable=False)
    service_fee = Column(Float, nullable=False)
    taxes = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    total_fils = Column(BigInteger, nullable=False)
    currency = Column(String(3), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BookingCancellation(Base):
    """Refund (and host penalty) computed when a booking is cancelled"""

    __tablename__ = "booking_cancellation"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(Text, nullable=False, index=True)
    initiated_by = Column(Text, nullable=False)  # "guest" or "host"
    policy = Column(Text, nullable=True)  # None for host cancellations
    total_amount = Column(Float, nullable=False)
    check_in = Column(DateTime(timezone=True), nullable=False)
    cancelled_at = Column(DateTime(timezone=True), nullable=False)
    refund_amount = Column(Float, nullable=False)
    refund_percentage = Column(Integer, nullable=False)
    service_fee = Column(Float, nullable=False)
    penalty_amount = Column(Float, nullable=True)
    penalty_percentage = Column(Integer, nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
