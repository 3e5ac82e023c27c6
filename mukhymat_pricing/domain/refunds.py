"""Cancellation policy engine - guest refunds and host penalties"""

from datetime import datetime
from decimal import Decimal, localcontext
from typing import Dict, Optional, Tuple, Union

from mukhymat_pricing.domain.exceptions import UnknownPolicyError
from mukhymat_pricing.domain.models import CancellationPolicy, HostPenalty, RefundCalculation, RefundTier
from mukhymat_pricing.domain.pricing import MONEY_CONTEXT, to_decimal
from mukhymat_pricing.utils.date_utils import days_until, hours_until

# Platform fee kept on every guest cancellation, whatever the policy or timing.
# Independent of the booking-time service_fee_percentage.
SERVICE_FEE_RATE = Decimal("0.10")

# Descending by min_hours; first tier with hours_until_check_in >= min_hours wins
POLICY_TIERS: Dict[CancellationPolicy, Tuple[RefundTier, ...]] = {
    CancellationPolicy.FLEXIBLE: (
        RefundTier(24, 100, "Full refund (cancelled 24+ hours before check-in)"),
    ),
    CancellationPolicy.MODERATE: (
        RefundTier(120, 100, "Full refund (cancelled 5+ days before check-in)"),
        RefundTier(48, 50, "50% refund (cancelled 48+ hours before check-in)"),
    ),
    CancellationPolicy.STRICT: (
        RefundTier(168, 50, "50% refund (cancelled 7+ days before check-in)"),
    ),
}

NO_REFUND_MESSAGES: Dict[CancellationPolicy, str] = {
    CancellationPolicy.FLEXIBLE: "No refund (cancelled less than 24 hours before check-in)",
    CancellationPolicy.MODERATE: "No refund (cancelled less than 48 hours before check-in)",
    CancellationPolicy.STRICT: "No refund (cancelled less than 7 days before check-in)",
}

HOST_PENALTY_FREE_DAYS = 30


def resolve_policy(policy: Union[CancellationPolicy, str]) -> CancellationPolicy:
    """Accept an enum member or its value ('flexible', 'moderate', 'strict')"""
    try:
        return CancellationPolicy(policy)
    except ValueError as e:
        raise UnknownPolicyError(f"Unknown cancellation policy: {policy!r}") from e


def policy_tiers(policy: Union[CancellationPolicy, str]) -> Tuple[RefundTier, ...]:
    return POLICY_TIERS[resolve_policy(policy)]


def match_tier(policy: Union[CancellationPolicy, str], hours_until_check_in: float) -> Optional[RefundTier]:
    """Most generous tier the lead time qualifies for, or None (no refund)"""
    for tier in policy_tiers(policy):
        if hours_until_check_in >= tier.min_hours:
            return tier
    return None


def calculate_refund(
    total_amount: float,
    check_in: datetime,
    cancelled_at: datetime,
    policy: Union[CancellationPolicy, str] = CancellationPolicy.MODERATE,
) -> RefundCalculation:
    """
    Calculate the guest refund for a guest-initiated cancellation.

    The 10% service fee is never refunded. The rest of the total is refunded
    at the percentage of the first tier whose threshold the lead time meets:

    - flexible: 24h+ -> 100%, otherwise 0%
    - moderate: 120h+ -> 100%, 48h+ -> 50%, otherwise 0%
    - strict:   168h+ -> 50%, otherwise 0%

    Thresholds are inclusive. Cancelling after check-in (negative lead time)
    lands on the no-refund branch; the engine never refuses a cancellation.

    Raises:
        UnknownPolicyError: If policy is not a known policy name
    """
    policy = resolve_policy(policy)

    tier = match_tier(policy, hours_until(check_in, cancelled_at))
    if tier is not None:
        refund_percentage = tier.refund_percentage
        message = tier.message
    else:
        refund_percentage = 0
        message = NO_REFUND_MESSAGES[policy]

    with localcontext(MONEY_CONTEXT):
        total = to_decimal(total_amount)
        service_fee = total * SERVICE_FEE_RATE
        refund_amount = (total - service_fee) * refund_percentage / 100

    return RefundCalculation(
        refund_amount=float(refund_amount),
        refund_percentage=refund_percentage,
        service_fee=float(service_fee),
        can_cancel=True,
        message=message,
    )


def calculate_host_cancellation_refund(total_amount: float) -> RefundCalculation:
    """Guest refund when the host cancels: everything back, service fee waived"""
    return RefundCalculation(
        refund_amount=float(total_amount),
        refund_percentage=100,
        service_fee=0.0,
        can_cancel=True,
        message="Full refund (host-initiated cancellation)",
    )


def calculate_host_penalty(total_amount: float, check_in: datetime, cancelled_at: datetime) -> HostPenalty:
    """
    Penalty deducted from the host payout for a host-initiated cancellation.

    Lead time in whole days, partial days rounded up:
    - more than 30 days: 0%
    - 15-30 days:        10%
    - 7-14 days:         25%
    - under 7 days:      50%
    """
    days = days_until(check_in, cancelled_at)

    if days > HOST_PENALTY_FREE_DAYS:
        penalty_percentage = 0
        message = "No penalty (cancelled 30+ days before check-in)"
    elif days >= 15:
        penalty_percentage = 10
        message = "10% penalty (cancelled 15-30 days before check-in)"
    elif days >= 7:
        penalty_percentage = 25
        message = "25% penalty (cancelled 7-14 days before check-in)"
    else:
        penalty_percentage = 50
        message = "50% penalty (cancelled less than 7 days before check-in)"

    with localcontext(MONEY_CONTEXT):
        penalty_amount = to_decimal(total_amount) * penalty_percentage / 100

    return HostPenalty(
        penalty_amount=float(penalty_amount),
        penalty_percentage=penalty_percentage,
        message=message,
    )


def is_within_host_penalty_period(check_in: datetime, cancelled_at: datetime) -> bool:
    """True when a host cancellation at cancelled_at would carry a penalty"""
    return days_until(check_in, cancelled_at) <= HOST_PENALTY_FREE_DAYS
