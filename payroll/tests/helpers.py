"""
Test utilities for the wage engine.
"""

from datetime import datetime

import pytz

from payroll.models import PayRatePolicy

LONDON = pytz.timezone("Europe/London")


def london(year, month, day, hour=0, minute=0, second=0):
    """Aware datetime for a London wall-clock time (not for ambiguous hours)."""
    return LONDON.localize(datetime(year, month, day, hour, minute, second), is_dst=None)


def make_policy(**overrides):
    """Unsaved PayRatePolicy with the default rates, for tests that need no DB."""
    values = {"company_id": 1, "driver_id": None}
    values.update(overrides)
    return PayRatePolicy(**values)


class FakeOracle:
    """Bank holiday oracle answering from a fixed set of dates"""

    def __init__(self, holidays=()):
        self.holidays = set(holidays)
        self.calls = []
        self.prepared = []

    def is_bank_holiday(self, company_id, day):
        self.calls.append((company_id, day))
        return day in self.holidays

    def prepare(self, company_id, years):
        self.prepared.append((company_id, sorted(years)))
