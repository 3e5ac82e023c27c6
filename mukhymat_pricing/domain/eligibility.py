"""Refund eligibility checker - booking-level guards on top of the policy engine"""

from datetime import datetime, timedelta
from typing import Union

from mukhymat_pricing.domain.models import CancellationPolicy, RefundEligibility
from mukhymat_pricing.domain.refunds import calculate_refund, match_tier
from mukhymat_pricing.utils.date_utils import hours_until


def _not_eligible(reason: str) -> RefundEligibility:
    return RefundEligibility(eligible=False, amount=0.0, percentage=0, reason=reason)


def check_refund_eligibility(
    total_amount: float,
    check_in: datetime,
    policy: Union[CancellationPolicy, str] = CancellationPolicy.MODERATE,
    *,
    as_of: datetime,
    refundable: bool = True,
    already_refunded: bool = False,
) -> RefundEligibility:
    """
    Decide whether a guest cancelling at as_of gets money back, and until when.

    Guards (first match wins):
    1. Listing marked non-refundable
    2. Booking already refunded
    3. Check-in already passed
    Otherwise the policy engine sets amount and percentage; the deadline is the
    last moment the matched tier still applies (check_in - tier threshold).

    Raises:
        UnknownPolicyError: If policy is not a known policy name
    """
    if not refundable:
        return _not_eligible("This booking has a non-refundable policy")

    if already_refunded:
        return _not_eligible("This booking has already been refunded")

    hours = hours_until(check_in, as_of)
    if hours < 0:
        return _not_eligible("Cannot refund after check-in date has passed")

    calculation = calculate_refund(total_amount, check_in, as_of, policy)
    tier = match_tier(policy, hours)
    deadline = check_in - timedelta(hours=tier.min_hours) if tier is not None else None

    return RefundEligibility(
        eligible=calculation.refund_percentage > 0,
        amount=calculation.refund_amount,
        percentage=calculation.refund_percentage,
        reason=calculation.message,
        deadline=deadline,
    )


def format_refund_deadline(deadline: datetime) -> str:
    """Display form, e.g. 'Mar 05, 2026 at 3:04 PM'"""
    hour = deadline.hour % 12 or 12
    return f"{deadline:%b %d, %Y} at {hour}:{deadline:%M %p}"
