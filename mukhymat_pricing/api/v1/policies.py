"""GET /v1/policies - Cancellation policy tier tables"""

from fastapi import APIRouter

from mukhymat_pricing.api.v1.schemas import PoliciesResponse, PolicySchema, RefundTierSchema
from mukhymat_pricing.domain.models import CancellationPolicy
from mukhymat_pricing.domain.refunds import NO_REFUND_MESSAGES, SERVICE_FEE_RATE, policy_tiers

router = APIRouter()


@router.get("/policies", response_model=PoliciesResponse)
def list_policies():
    """Describe every policy a host can pick, most generous tier first"""
    policies = [
        PolicySchema(
            policy=policy,
            tiers=[
                RefundTierSchema(
                    min_hours=tier.min_hours,
                    refund_percentage=tier.refund_percentage,
                    message=tier.message,
                )
                for tier in policy_tiers(policy)
            ],
            no_refund_message=NO_REFUND_MESSAGES[policy],
        )
        for policy in CancellationPolicy
    ]

    return PoliciesResponse(
        service_fee_percentage=int(SERVICE_FEE_RATE * 100),
        policies=policies,
    )
