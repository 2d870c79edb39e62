"""
Deterministic price quotation for a stay request.

A quote is derived from per-person-per-night rates, a time-bounded
percentage discount and a prepayment share. Every monetary rounding point
rounds half-up to whole currency units.

Usage:
    quote = compute_quote(StayRequest(room_type="lux", nights=3, adults=2), default_discount_policy())
    assert quote.prepay_amount + quote.remainder_amount == quote.total_amount
"""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from src.config import settings
from src.schemas.stay_schema import DiscountPolicy, Quote, RoomType, StayRequest

logger = logging.getLogger(__name__)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero (never banker's rounding)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(amount: int, percent: int) -> int:
    """Return ``amount * percent / 100`` rounded half-up."""
    return round_half_up(Decimal(amount) * Decimal(percent) / Decimal(100))


def default_discount_policy() -> DiscountPolicy:
    """The process-wide discount policy from configuration."""
    return DiscountPolicy(
        percent=settings.pricing.discount_percent,
        valid_until=settings.pricing.discount_valid_until,
    )


def is_discount_active(checkin: Optional[date], policy: DiscountPolicy) -> bool:
    """True iff the check-in falls on or before the policy's last day."""
    if checkin is None:
        return False
    return checkin <= policy.valid_until


def rate_for(room_type: RoomType, rates: Optional[Mapping[str, int]] = None) -> int:
    """Per-person-per-night rate; unknown room types use the standard rate.

    A table without a ``standard`` entry falls back to the configured standard rate.
    """
    table = rates if rates is not None else settings.pricing.room_rates()
    key = room_type.value if isinstance(room_type, RoomType) else str(room_type)
    standard = table.get(RoomType.STANDARD.value, settings.pricing.rate_standard)
    return table.get(key, standard)


def compute_quote(
    request: StayRequest,
    policy: DiscountPolicy,
    *,
    rates: Optional[Mapping[str, int]] = None,
    prepay_percent: Optional[int] = None,
) -> Quote:
    """
    Compute the full price breakdown for a stay.

    Args:
        request: Stay parameters (already clamped by the model).
        policy: Discount window and percentage.
        rates: Room-type rate table, defaults to configuration.
        prepay_percent: Prepayment share, defaults to configuration.

    Returns:
        An immutable Quote.
    """
    if prepay_percent is None:
        prepay_percent = settings.pricing.prepay_percent

    nights = max(1, request.nights)
    guests = max(1, request.adults) + max(0, request.children)

    per_night = rate_for(request.room_type, rates)
    base = per_night * nights * guests

    discount_on = is_discount_active(request.checkin, policy)
    discount = percent_of(base, policy.percent) if discount_on else 0

    total = max(0, base - discount)
    prepay = percent_of(total, prepay_percent)
    remainder = max(0, total - prepay)

    logger.debug(
        "Quote: room=%s nights=%d guests=%d base=%d discount=%d total=%d",
        request.room_type.value, nights, guests, base, discount, total,
    )
    return Quote(
        guests=guests,
        nights=nights,
        per_night_rate=per_night,
        base_amount=base,
        discount_applied=discount_on,
        discount_percent=policy.percent,
        discount_amount=discount,
        total_amount=total,
        prepay_percent=prepay_percent,
        prepay_amount=prepay,
        remainder_amount=remainder,
    )
