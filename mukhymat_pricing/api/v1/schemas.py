"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional

from mukhymat_pricing.domain.models import CancellationPolicy

# Upper bound for money fields accepted over HTTP
MAX_AMOUNT = 1_000_000_000


class QuoteRequest(BaseModel):
    """Request body for POST /v1/quotes"""

    model_config = ConfigDict(allow_inf_nan=False)

    camp_id: str = Field(..., min_length=1, description="Camp/listing identifier")
    price_per_night: float = Field(..., ge=0, le=MAX_AMOUNT, description="Nightly rate per guest, major currency unit")
    nights: int = Field(..., gt=0, le=365, description="Number of nights")
    guests: int = Field(..., gt=0, le=1000, description="Number of guests")
    service_fee_percentage: Optional[float] = Field(None, ge=0, le=100)
    tax_percentage: Optional[float] = Field(None, ge=0, le=100)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)


class QuoteResponse(BaseModel):
    """Response for POST /v1/quotes and GET /v1/quotes/{quote_id}"""

    quote_id: str
    camp_id: str
    camp_price: float
    service_fee: float
    taxes: float
    total: float
    total_fils: int
    currency: str
    formatted_total: str
    created_at: Optional[str] = None


class RefundTierSchema(BaseModel):
    """One rung of a policy's refund ladder"""

    min_hours: int
    refund_percentage: int
    message: str


class PolicySchema(BaseModel):
    policy: CancellationPolicy
    tiers: List[RefundTierSchema]
    no_refund_message: str


class PoliciesResponse(BaseModel):
    """Response for GET /v1/policies"""

    service_fee_percentage: int
    policies: List[PolicySchema]


class GuestCancellationRequest(BaseModel):
    """Request body for POST /v1/cancellations/guest"""

    model_config = ConfigDict(allow_inf_nan=False)

    booking_id: str = Field(..., min_length=1, description="Booking identifier")
    total_amount: float = Field(..., ge=0, le=MAX_AMOUNT, description="Amount the guest paid")
    check_in: datetime
    cancelled_at: Optional[datetime] = Field(None, description="Defaults to now (UTC)")
    policy: Optional[CancellationPolicy] = None


class HostCancellationRequest(BaseModel):
    """Request body for POST /v1/cancellations/host"""

    model_config = ConfigDict(allow_inf_nan=False)

    booking_id: str = Field(..., min_length=1, description="Booking identifier")
    total_amount: float = Field(..., ge=0, le=MAX_AMOUNT, description="Amount the guest paid")
    check_in: datetime
    cancelled_at: Optional[datetime] = Field(None, description="Defaults to now (UTC)")


class RefundSchema(BaseModel):
    refund_amount: float
    refund_percentage: int
    service_fee: float
    can_cancel: bool
    message: str


class HostPenaltySchema(BaseModel):
    penalty_amount: float
    penalty_percentage: int
    message: str


class GuestCancellationResponse(BaseModel):
    """Response for POST /v1/cancellations/guest"""

    cancellation_id: str
    booking_id: str
    policy: CancellationPolicy
    refund: RefundSchema


class HostCancellationResponse(BaseModel):
    """Response for POST /v1/cancellations/host"""

    cancellation_id: str
    booking_id: str
    guest_refund: RefundSchema
    host_penalty: HostPenaltySchema
    within_penalty_period: bool


class CancellationHistoryItem(BaseModel):
    """Single cancellation in history"""

    cancellation_id: str
    initiated_by: str
    policy: Optional[str] = None
    total_amount: float
    refund_amount: float
    refund_percentage: int
    penalty_amount: Optional[float] = None
    penalty_percentage: Optional[int] = None
    message: str
    created_at: str


class CancellationHistoryResponse(BaseModel):
    """Response for GET /v1/cancellations/history"""

    booking_id: str
    cancellations: List[CancellationHistoryItem]


class EligibilityRequest(BaseModel):
    """Request body for POST /v1/refunds/eligibility"""

    model_config = ConfigDict(allow_inf_nan=False)

    total_amount: float = Field(..., ge=0, le=MAX_AMOUNT)
    check_in: datetime
    policy: Optional[CancellationPolicy] = None
    refundable: bool = True
    already_refunded: bool = False
    as_of: Optional[datetime] = Field(None, description="Defaults to now (UTC)")


class EligibilityResponse(BaseModel):
    """Response for POST /v1/refunds/eligibility"""

    eligible: bool
    amount: float
    percentage: int
    reason: str
    deadline: Optional[datetime] = None
    formatted_deadline: Optional[str] = None
