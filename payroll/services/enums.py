"""
Enumerations for the wage calculation engine.
"""

from enum import Enum


class PayCategory(Enum):
    """
    Mutually exclusive category of a worked minute.

    Declaration order is the classification priority: a minute takes the
    first category whose condition holds.
    """

    BANK_HOLIDAY = "bank_holiday"
    NIGHT = "night"
    WEEKEND = "weekend"
    REGULAR = "regular"

    def __str__(self):
        return self.value

    @property
    def minutes_field(self) -> str:
        return f"{self.value}_minutes"

    @property
    def pay_field(self) -> str:
        return f"{self.value}_pay"

    @property
    def rate_field(self) -> str:
        """PayRatePolicy attribute holding this category's hourly rate"""
        if self is PayCategory.REGULAR:
            return "base_rate"
        return f"{self.value}_rate"
