"""
Tests for CivilCalendar day and hour boundaries, including DST changes.
"""

from datetime import date, datetime, timedelta

import pytz

from payroll.civil_calendar import CivilCalendar
from payroll.tests.helpers import LONDON, london


class TestCivilCalendar:
    def test_zone_from_settings(self):
        assert CivilCalendar().zone == "Europe/London"

    def test_local_date_differs_from_utc_in_summer(self, calendar):
        # 23:30 UTC on 15 June is 00:30 BST on 16 June
        instant = pytz.utc.localize(datetime(2026, 6, 15, 23, 30))

        assert calendar.local_date(instant) == date(2026, 6, 16)
        assert calendar.local_hour(instant) == 0
        assert calendar.weekday(instant) == 1  # Tuesday

    def test_naive_datetime_is_read_as_local(self, calendar):
        aware = calendar.make_aware(datetime(2026, 6, 15, 8, 0))

        assert aware == london(2026, 6, 15, 8)

    def test_next_midnight_on_normal_day(self, calendar):
        assert calendar.next_midnight(london(2026, 6, 15, 8)) == london(2026, 6, 16)

    def test_next_midnight_from_midnight_is_following_day(self, calendar):
        assert calendar.next_midnight(london(2026, 6, 15)) == london(2026, 6, 16)

    def test_day_before_spring_forward_has_24_hours(self, calendar):
        start = calendar.start_of_day(date(2026, 3, 28))
        assert calendar.next_midnight(start) - start == timedelta(hours=24)

    def test_spring_forward_day_has_23_hours(self, calendar):
        start = calendar.start_of_day(date(2026, 3, 29))
        assert calendar.next_midnight(start) - start == timedelta(hours=23)

    def test_fall_back_day_has_25_hours(self, calendar):
        start = calendar.start_of_day(date(2026, 10, 25))
        assert calendar.next_midnight(start) - start == timedelta(hours=25)

    def test_next_hour_boundary_skips_missing_hour(self, calendar):
        # 00:30 GMT on 29 March; the next local full hour is 02:00 BST
        instant = london(2026, 3, 29, 0, 30)
        boundary = calendar.next_hour_boundary(instant)

        assert boundary - instant == timedelta(minutes=30)
        assert calendar.local_hour(boundary) == 2

    def test_next_hour_boundary_repeats_hour_on_fall_back(self, calendar):
        first_one_am = LONDON.localize(datetime(2026, 10, 25, 1, 0), is_dst=True)
        second_one_am = calendar.next_hour_boundary(first_one_am)

        assert second_one_am - first_one_am == timedelta(hours=1)
        assert calendar.local_hour(second_one_am) == 1

    def test_next_hour_boundary_mid_hour(self, calendar):
        instant = london(2026, 6, 15, 8, 17, 45)
        assert calendar.next_hour_boundary(instant) == london(2026, 6, 15, 9)

    def test_ambiguous_wall_time_takes_first_occurrence(self, calendar):
        aware = calendar.make_aware(datetime(2026, 10, 25, 1, 30))
        assert aware.utcoffset() == timedelta(hours=1)

    def test_missing_wall_time_moves_past_gap(self, calendar):
        aware = calendar.make_aware(datetime(2026, 3, 29, 1, 30))
        assert aware.astimezone(pytz.utc) == pytz.utc.localize(datetime(2026, 3, 29, 1, 30))
        assert calendar.local_hour(aware) == 2
