"""
Fixtures for wage engine tests.
"""

import pytest

from payroll.civil_calendar import CivilCalendar
from payroll.tests.helpers import FakeOracle, make_policy


@pytest.fixture
def calendar():
    return CivilCalendar("Europe/London")


@pytest.fixture
def policy():
    return make_policy()


@pytest.fixture
def oracle():
    return FakeOracle()
