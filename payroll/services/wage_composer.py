"""
Wage composition: minutes and rates to money
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from payroll.services.enums import PayCategory

MINUTES_PER_HOUR = Decimal("60")
CENT = Decimal("0.01")


def quantize_money(amount):
    """Round an amount to pennies. Only used when storing or displaying."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class WageAmounts:
    regular_pay: Decimal
    night_pay: Decimal
    weekend_pay: Decimal
    bank_holiday_pay: Decimal
    overtime_pay: Decimal

    @property
    def total_pay(self):
        return (
            self.regular_pay
            + self.night_pay
            + self.weekend_pay
            + self.bank_holiday_pay
            + self.overtime_pay
        )

    def rounded(self):
        """Field values ready for persistence"""
        return {
            "regular_pay": quantize_money(self.regular_pay),
            "night_pay": quantize_money(self.night_pay),
            "weekend_pay": quantize_money(self.weekend_pay),
            "bank_holiday_pay": quantize_money(self.bank_holiday_pay),
            "overtime_pay": quantize_money(self.overtime_pay),
            "total_pay": quantize_money(self.total_pay),
        }


class WageComposer:
    """
    Prices category minutes at their rates and adds the overtime uplift.

    Overtime is paid at ``base_rate * overtime_multiplier`` in addition to the
    category pay those minutes already received.
    """

    def compose(self, minutes_by_category, overtime_minutes, policy):
        category_pay = {
            category.pay_field: self._price(
                minutes_by_category.get(category, 0), getattr(policy, category.rate_field)
            )
            for category in PayCategory
        }
        overtime_rate = Decimal(policy.base_rate) * Decimal(policy.overtime_multiplier)

        return WageAmounts(
            overtime_pay=self._price(overtime_minutes, overtime_rate), **category_pay
        )

    @staticmethod
    def _price(minutes, hourly_rate):
        return Decimal(minutes) / MINUTES_PER_HOUR * Decimal(hourly_rate)

    @staticmethod
    def rates_snapshot(policy):
        return {
            "base_rate": str(policy.base_rate),
            "night_rate": str(policy.night_rate),
            "weekend_rate": str(policy.weekend_rate),
            "bank_holiday_rate": str(policy.bank_holiday_rate),
            "overtime_multiplier": str(policy.overtime_multiplier),
            "night_start_hour": policy.night_start_hour,
            "night_end_hour": policy.night_end_hour,
            "daily_overtime_threshold": policy.daily_overtime_threshold,
        }
