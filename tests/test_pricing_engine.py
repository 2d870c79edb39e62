"""Tests for quote computation."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.pricing.engine import (
    compute_quote,
    default_discount_policy,
    is_discount_active,
    percent_of,
    rate_for,
    round_half_up,
)
from src.schemas.stay_schema import DiscountPolicy, RoomType, StayRequest
from tests.conftest import RATES

NO_DISCOUNT = DiscountPolicy(percent=10, valid_until=date(2000, 1, 1))


class TestReferenceQuotes:
    def test_standard_single_night_without_discount(self):
        request = StayRequest(room_type="standard", nights=1, adults=1, children=0,
                              checkin=date(2026, 7, 1))
        quote = compute_quote(request, NO_DISCOUNT, rates=RATES, prepay_percent=30)

        assert quote.per_night_rate == 4200
        assert quote.base_amount == 4200
        assert not quote.discount_applied
        assert quote.discount_amount == 0
        assert quote.total_amount == 4200
        assert quote.prepay_amount == 1260
        assert quote.remainder_amount == 2940

    def test_lux_family_within_discount_window(self, policy):
        request = StayRequest(room_type="lux", nights=3, adults=2, children=1,
                              checkin=date(2026, 5, 20))
        quote = compute_quote(request, policy, rates=RATES, prepay_percent=30)

        assert quote.per_night_rate == 7900
        assert quote.guests == 3
        assert quote.base_amount == 71100
        assert quote.discount_applied
        assert quote.discount_amount == 7110
        assert quote.total_amount == 63990
        assert quote.prepay_amount == 19197
        assert quote.remainder_amount == 44793

    def test_comfort_rate(self, policy):
        request = StayRequest(room_type="comfort", nights=2, adults=2)
        quote = compute_quote(request, policy, rates=RATES)
        assert quote.base_amount == 5600 * 2 * 2


class TestDiscountWindow:
    def test_checkin_on_last_day_gets_discount(self, policy):
        request = StayRequest(nights=1, adults=1, checkin=policy.valid_until)
        assert compute_quote(request, policy, rates=RATES).discount_applied

    def test_checkin_day_after_gets_no_discount(self, policy):
        request = StayRequest(nights=1, adults=1, checkin=policy.valid_until + timedelta(days=1))
        quote = compute_quote(request, policy, rates=RATES)
        assert not quote.discount_applied
        assert quote.discount_amount == 0
        assert quote.total_amount == quote.base_amount

    def test_far_future_checkin_gets_no_discount(self, policy):
        assert not is_discount_active(date(2031, 1, 1), policy)

    def test_past_checkin_still_qualifies(self, policy):
        assert is_discount_active(date(2020, 1, 1), policy)

    def test_missing_checkin_gets_no_discount(self, policy):
        assert not is_discount_active(None, policy)
        quote = compute_quote(StayRequest(), policy, rates=RATES)
        assert not quote.discount_applied

    def test_quote_records_policy_percent(self, policy):
        quote = compute_quote(StayRequest(checkin=date(2026, 1, 1)), policy, rates=RATES)
        assert quote.discount_percent == 10

    def test_default_policy_comes_from_config(self):
        from src.config import settings

        default = default_discount_policy()
        assert default.percent == settings.pricing.discount_percent
        assert default.valid_until == settings.pricing.discount_valid_until


class TestInputClamping:
    def test_zero_nights_floored_to_one(self, policy):
        quote = compute_quote(StayRequest(nights=0), policy, rates=RATES)
        assert quote.nights == 1

    def test_zero_adults_floored_to_one(self, policy):
        request = StayRequest(adults=0, children=0)
        assert request.adults == 1
        assert compute_quote(request, policy, rates=RATES).guests == 1

    def test_negative_children_floored_to_zero(self):
        assert StayRequest(children=-3).children == 0

    def test_guests_capped_at_eight_each(self):
        request = StayRequest(adults=12, children=20)
        assert request.adults == 8
        assert request.children == 8

    def test_string_inputs_coerced(self, policy):
        request = StayRequest(room_type="comfort", nights="2", adults="3", children="")
        assert (request.nights, request.adults, request.children) == (2, 3, 0)

    def test_unknown_room_type_falls_back_to_standard(self, policy):
        request = StayRequest(room_type="presidential")
        assert request.room_type == RoomType.STANDARD
        assert compute_quote(request, policy, rates=RATES).per_night_rate == 4200

    def test_room_type_is_case_insensitive(self):
        assert StayRequest(room_type="LUX").room_type == RoomType.LUX

    def test_blank_checkin_is_none(self):
        assert StayRequest(checkin="").checkin is None

    def test_rate_table_without_room_falls_back(self):
        assert rate_for(RoomType.LUX, {"standard": 1000}) == 1000

    def test_rate_table_without_standard_uses_configured_rate(self, policy):
        from src.config import settings

        assert rate_for(RoomType.LUX, {"comfort": 5000}) == settings.pricing.rate_standard
        quote = compute_quote(StayRequest(room_type="lux"), policy, rates={})
        assert quote.per_night_rate == settings.pricing.rate_standard


class TestRounding:
    def test_half_rounds_up_not_to_even(self):
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("19196.5")) == 19197

    def test_percent_of(self):
        assert percent_of(71100, 10) == 7110
        assert percent_of(25, 10) == 3

    def test_half_unit_discount_rounds_up(self):
        request = StayRequest(room_type="standard", nights=1, adults=1, checkin=date(2026, 1, 1))
        policy = DiscountPolicy(percent=10, valid_until=date(2026, 12, 31))
        quote = compute_quote(request, policy, rates={"standard": 25}, prepay_percent=30)

        assert quote.discount_amount == 3
        assert quote.total_amount == 22
        assert quote.prepay_amount == 7
        assert quote.remainder_amount == 15


class TestQuoteInvariants:
    @pytest.mark.parametrize("room", ["standard", "comfort", "lux"])
    @pytest.mark.parametrize("nights,adults,children", [(1, 1, 0), (7, 2, 2), (14, 8, 8), (3, 1, 5)])
    def test_totals_add_up(self, policy, room, nights, adults, children):
        request = StayRequest(room_type=room, nights=nights, adults=adults,
                              children=children, checkin=date(2026, 5, 1))
        quote = compute_quote(request, policy, rates=RATES)

        assert quote.base_amount == quote.per_night_rate * quote.nights * quote.guests
        assert quote.total_amount == quote.base_amount - quote.discount_amount >= 0
        assert quote.prepay_amount + quote.remainder_amount == quote.total_amount
        assert quote.remainder_amount >= 0

    def test_full_discount_gives_zero_total(self):
        policy = DiscountPolicy(percent=100, valid_until=date(2026, 12, 31))
        quote = compute_quote(StayRequest(checkin=date(2026, 1, 1)), policy, rates=RATES)
        assert quote.total_amount == 0
        assert quote.prepay_amount == 0
        assert quote.remainder_amount == 0

    def test_full_prepayment_leaves_no_remainder(self, policy):
        quote = compute_quote(StayRequest(nights=2), policy, rates=RATES, prepay_percent=100)
        assert quote.prepay_amount == quote.total_amount
        assert quote.remainder_amount == 0

    def test_quote_is_immutable(self, policy):
        quote = compute_quote(StayRequest(), policy, rates=RATES)
        with pytest.raises(Exception):
            quote.total_amount = 1

    def test_policy_percent_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            DiscountPolicy(percent=120, valid_until=date(2026, 1, 1))
