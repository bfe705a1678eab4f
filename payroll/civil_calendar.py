"""
Civil calendar for wage calculations

All day and hour boundaries used to classify a shift are taken in one fixed
reference timezone (``WAGE_CALCULATION_TIMEZONE``), independent of where the
instants were recorded. Daylight saving transitions are handled by pytz.
"""

from datetime import datetime, time, timedelta

import pytz

from django.conf import settings

ONE_HOUR = timedelta(hours=1)


class CivilCalendar:
    def __init__(self, tz_name=None):
        tz_name = tz_name or getattr(settings, "WAGE_CALCULATION_TIMEZONE", "Europe/London")
        self.tz = pytz.timezone(tz_name)

    @property
    def zone(self):
        return self.tz.zone

    def make_aware(self, value):
        """Attach the reference timezone to a naive datetime."""
        if value.tzinfo is not None:
            return value
        return self._localize(value)

    def to_local(self, instant):
        return self.make_aware(instant).astimezone(self.tz)

    def local_date(self, instant):
        return self.to_local(instant).date()

    def local_hour(self, instant):
        return self.to_local(instant).hour

    def weekday(self, instant):
        """Monday is 0, Sunday is 6."""
        return self.to_local(instant).weekday()

    def start_of_day(self, day):
        """First instant of the civil date ``day``."""
        return self._localize(datetime.combine(day, time.min))

    def next_midnight(self, instant):
        """First civil midnight strictly after ``instant``."""
        return self.start_of_day(self.local_date(instant) + timedelta(days=1))

    def next_hour_boundary(self, instant):
        """First local full hour strictly after ``instant``."""
        local = self.to_local(instant)
        floor = local - timedelta(
            minutes=local.minute, seconds=local.second, microseconds=local.microsecond
        )
        return (floor + ONE_HOUR).astimezone(self.tz)

    def _localize(self, naive):
        try:
            return self.tz.localize(naive, is_dst=None)
        except pytz.exceptions.AmbiguousTimeError:
            # Repeated wall time: take the first occurrence
            return self.tz.localize(naive, is_dst=True)
        except pytz.exceptions.NonExistentTimeError:
            # Skipped wall time: read with the pre-transition offset, which
            # lands on the first valid instant after the gap
            return self.tz.normalize(self.tz.localize(naive, is_dst=False))
