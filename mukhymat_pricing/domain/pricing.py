"""Price breakdown for a camp booking - the amount charged at checkout"""

from decimal import Context, Decimal, ROUND_HALF_UP, localcontext
from typing import Union
from mukhymat_pricing.domain.models import PriceBreakdown

TWO_PLACES = Decimal("0.01")
FILS_PER_BHD = 1000

# Wide enough to quantize any float to cents; invalid operations (inf - inf)
# yield NaN instead of raising
MONEY_CONTEXT = Context(prec=400, traps=[])


def to_decimal(value: float) -> Decimal:
    # str() keeps the value the caller wrote (33.335, not 33.33499999...)
    return Decimal(str(value))


def _round2(value: Decimal) -> Decimal:
    if not value.is_finite():
        return value
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round_to_two_decimals(num: float) -> float:
    """
    Round half-up to 2 decimal places.

    Half-values round away from zero on both signs: 2.675 -> 2.68 and
    -0.005 -> -0.01. NaN and infinities come back unchanged.
    """
    with localcontext(MONEY_CONTEXT):
        return float(_round2(to_decimal(num)))


def calculate_price_breakdown(
    price_per_night: float,
    nights: int,
    guests: int,
    service_fee_percentage: float = 10,
    tax_percentage: float = 10,
    currency: str = "BHD",
) -> PriceBreakdown:
    """
    Calculate camp price, service fee, taxes and total for a stay.

    Rounding is incremental: the fee is rounded to 2 decimals before it
    feeds the taxes, and the total is built from the rounded fee and taxes.
    The camp price itself stays exact (BHD rates carry fils) and is only
    rounded for display.

    - camp_price  = price_per_night * nights * guests
    - service_fee = camp_price * service_fee_percentage / 100
    - taxes       = (camp_price + service_fee) * tax_percentage / 100
    - total       = camp_price + service_fee + taxes

    Inputs are not validated; negative values propagate arithmetically and
    NaN or infinite inputs give NaN or infinite lines.

    Example:
        12.345 BHD, 1 night, 1 guest, 10% fee, 10% tax
        fee 1.2345 -> 1.23, taxes 1.3575 -> 1.36, total 14.935 -> 14.94
        (fee on the displayed 12.35 would charge 1.24 and 14.95)
    """
    with localcontext(MONEY_CONTEXT):
        camp_price = to_decimal(price_per_night) * to_decimal(nights) * to_decimal(guests)
        service_fee = _round2(camp_price * to_decimal(service_fee_percentage) / 100)
        taxes = _round2((camp_price + service_fee) * to_decimal(tax_percentage) / 100)
        total = _round2(camp_price + service_fee + taxes)

        return PriceBreakdown(
            camp_price=float(_round2(camp_price)),
            service_fee=float(service_fee),
            taxes=float(taxes),
            total=float(total),
            currency=currency,
        )


def bhd_to_fils(bhd: float) -> Union[int, float]:
    """
    Convert BHD to fils (smallest currency unit), rounded to a whole fils.

    NaN and infinities have no whole-fils value and are returned as floats.
    """
    with localcontext(MONEY_CONTEXT):
        fils = to_decimal(bhd) * FILS_PER_BHD
        if not fils.is_finite():
            return float(fils)
        return int(fils.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def fils_to_bhd(fils: int) -> float:
    return fils / FILS_PER_BHD


def format_price(amount: float, currency: str = "BHD") -> str:
    """Display form, e.g. '12.50 BHD'"""
    return f"{amount:.2f} {currency}"
