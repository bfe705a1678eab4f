"""
Tests for WageComposer and money rounding.
"""

from decimal import Decimal

import pytest

from payroll.services.enums import PayCategory
from payroll.services.wage_composer import WageComposer, quantize_money
from payroll.tests.helpers import make_policy


def minutes(regular=0, night=0, weekend=0, bank_holiday=0):
    return {
        PayCategory.REGULAR: regular,
        PayCategory.NIGHT: night,
        PayCategory.WEEKEND: weekend,
        PayCategory.BANK_HOLIDAY: bank_holiday,
    }


class TestWageComposer:
    def test_each_category_uses_its_rate(self):
        amounts = WageComposer().compose(
            minutes(regular=60, night=60, weekend=60, bank_holiday=60), 0, make_policy()
        )

        assert amounts.regular_pay == Decimal("12.00")
        assert amounts.night_pay == Decimal("15.00")
        assert amounts.weekend_pay == Decimal("18.00")
        assert amounts.bank_holiday_pay == Decimal("24.00")
        assert amounts.overtime_pay == 0
        assert amounts.total_pay == Decimal("69.00")

    @pytest.mark.parametrize("category", list(PayCategory))
    def test_category_minutes_land_in_own_pay_field(self, category):
        policy = make_policy()

        amounts = WageComposer().compose({category: 30}, 0, policy)

        assert getattr(amounts, category.pay_field) == getattr(policy, category.rate_field) / 2
        assert amounts.total_pay == getattr(amounts, category.pay_field)

    def test_overtime_paid_on_top_at_base_rate(self):
        amounts = WageComposer().compose(minutes(weekend=720), 210, make_policy())

        assert amounts.weekend_pay == Decimal("216.00")
        # 3.5h * 12.00 * 1.5
        assert amounts.overtime_pay == Decimal("63.00")
        assert amounts.total_pay == Decimal("279.00")

    def test_overtime_ignores_category_rate(self):
        amounts = WageComposer().compose(
            minutes(bank_holiday=600), 60, make_policy(overtime_multiplier=Decimal("2.00"))
        )

        assert amounts.overtime_pay == Decimal("24.00")

    def test_no_rounding_before_persistence(self):
        amounts = WageComposer().compose(
            minutes(regular=1), 0, make_policy(base_rate=Decimal("12.50"))
        )

        assert amounts.regular_pay.quantize(Decimal("0.0001")) == Decimal("0.2083")
        assert amounts.rounded()["regular_pay"] == Decimal("0.21")

    def test_total_is_rounded_sum_of_unrounded_parts(self):
        # Three parts of 0.005 each: rounded separately they would total 0.03
        policy = make_policy(
            base_rate=Decimal("0.30"),
            night_rate=Decimal("0.30"),
            weekend_rate=Decimal("0.30"),
        )
        amounts = WageComposer().compose(minutes(regular=1, night=1, weekend=1), 0, policy)
        rounded = amounts.rounded()

        assert rounded["regular_pay"] == Decimal("0.01")
        assert rounded["total_pay"] == Decimal("0.02")

    def test_rates_snapshot(self):
        snapshot = WageComposer.rates_snapshot(make_policy())

        assert snapshot["base_rate"] == "12.00"
        assert snapshot["night_start_hour"] == 22
        assert snapshot["daily_overtime_threshold"] == 480


class TestQuantizeMoney:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("1.005"), Decimal("1.01")),
            (Decimal("1.004"), Decimal("1.00")),
            (Decimal("2.675"), Decimal("2.68")),
            (0, Decimal("0.00")),
        ],
    )
    def test_half_up(self, value, expected):
        assert quantize_money(value) == expected
