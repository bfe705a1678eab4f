"""
Shift segmentation at civil midnights
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from payroll.civil_calendar import CivilCalendar
from payroll.exceptions import InvalidShiftError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftSegment:
    """Half-open part [start, end) of a shift lying inside one civil day."""

    start: datetime
    end: datetime
    local_date: date

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


class ShiftSegmenter:
    """Splits a shift into consecutive same-civil-day segments"""

    def __init__(self, calendar: Optional[CivilCalendar] = None):
        self.calendar = calendar or CivilCalendar()

    def validate(self, arrival, departure):
        """
        Return both instants as aware datetimes.

        Raises:
            InvalidShiftError: an instant is missing or departure is not after arrival
        """
        if arrival is None or departure is None:
            raise InvalidShiftError(
                "Shift needs both arrival and departure",
                details={"arrival": arrival, "departure": departure},
            )

        arrival = self.calendar.make_aware(arrival)
        departure = self.calendar.make_aware(departure)

        if departure <= arrival:
            raise InvalidShiftError(
                "Departure must be after arrival",
                details={
                    "arrival": arrival.isoformat(),
                    "departure": departure.isoformat(),
                },
            )
        return arrival, departure

    def split(self, arrival, departure) -> List[ShiftSegment]:
        """
        Split [arrival, departure) at every civil midnight it crosses.

        Returns:
            list: ShiftSegment objects in chronological order, covering the
            shift exactly with no gaps or overlaps
        """
        arrival, departure = self.validate(arrival, departure)

        segments = []
        cursor = arrival
        while cursor < departure:
            end = min(self.calendar.next_midnight(cursor), departure)
            segments.append(
                ShiftSegment(
                    start=cursor, end=end, local_date=self.calendar.local_date(cursor)
                )
            )
            cursor = end

        logger.debug(
            f"Split shift into {len(segments)} segment(s) in {self.calendar.zone}"
        )
        return segments
