"""Domain models - pure Python dataclasses representing pricing and cancellation outcomes"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class CancellationPolicy(str, Enum):
    """Named refund tier table chosen by the host for a listing"""

    FLEXIBLE = "flexible"
    MODERATE = "moderate"
    STRICT = "strict"


@dataclass(frozen=True)
class PriceBreakdown:
    """Amount charged for a stay, in the currency's major unit"""

    camp_price: float
    service_fee: float
    taxes: float
    total: float
    currency: str


@dataclass(frozen=True)
class RefundTier:
    """One rung of a policy's tier ladder"""

    min_hours: int
    refund_percentage: int
    message: str


@dataclass(frozen=True)
class RefundCalculation:
    """Guest refund for a cancelled booking"""

    refund_amount: float
    refund_percentage: int
    service_fee: float
    can_cancel: bool
    message: str


@dataclass(frozen=True)
class HostPenalty:
    """Deduction from the host payout for a host-initiated cancellation"""

    penalty_amount: float
    penalty_percentage: int
    message: str


@dataclass(frozen=True)
class RefundEligibility:
    """Booking-level refund answer shown before the guest confirms a cancellation"""

    eligible: bool
    amount: float
    percentage: int
    reason: str
    deadline: Optional[datetime] = None
