"""
Minute classification for a segmented shift.

Every whole minute of a shift falls into exactly one PayCategory. Minute k
starts at ``arrival + k minutes`` for ``0 <= k < floor(elapsed minutes)``, so a
trailing partial minute is never counted. Its category is decided by the
civil date and hour in which it starts:

    bank holiday > night > weekend > regular

Minutes are not walked one by one. Within a segment, runs of the same local
hour share a category, so only the number of minute starts inside each run is
needed.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List

from payroll.civil_calendar import CivilCalendar
from payroll.services.enums import PayCategory

logger = logging.getLogger(__name__)

ONE_MINUTE = timedelta(minutes=1)
WEEKEND_DAYS = (5, 6)  # Saturday, Sunday


def is_night_hour(hour, night_start_hour, night_end_hour):
    """
    Whether a local hour is inside the night window [start, end).

    A window with start > end wraps past midnight (22 to 6 covers 22:00-05:59).
    Equal start and end means there is no night window.
    """
    if night_start_hour == night_end_hour:
        return False
    if night_start_hour < night_end_hour:
        return night_start_hour <= hour < night_end_hour
    return hour >= night_start_hour or hour < night_end_hour


def _ceil_minutes(delta):
    return -((-delta) // ONE_MINUTE)


@dataclass
class ClassificationResult:
    total_minutes: int
    minutes: Dict[PayCategory, int] = field(
        default_factory=lambda: {category: 0 for category in PayCategory}
    )
    segments: List[dict] = field(default_factory=list)

    def as_fields(self):
        """Minute counts keyed by WageCalculation field name"""
        return {category.minutes_field: count for category, count in self.minutes.items()}


class MinuteClassifier:
    def __init__(self, oracle, calendar=None):
        self.oracle = oracle
        self.calendar = calendar or CivilCalendar()

    def classify(self, company_id, arrival, segments, policy):
        """
        Count the shift's minutes per category.

        Args:
            company_id (int): Company whose bank holidays apply
            arrival (datetime): Shift start; minute boundaries are counted from it
            segments (list): ShiftSegment objects from ShiftSegmenter.split
            policy (PayRatePolicy): Supplies the night window

        Returns:
            ClassificationResult
        """
        if not segments:
            return ClassificationResult(total_minutes=0)

        departure = segments[-1].end
        total_minutes = max(0, (departure - arrival) // ONE_MINUTE)
        result = ClassificationResult(total_minutes=total_minutes)

        holiday_by_date = {}
        for segment in segments:
            day = segment.local_date
            if day not in holiday_by_date:
                holiday_by_date[day] = self.oracle.is_bank_holiday(company_id, day)
            is_holiday = holiday_by_date[day]
            is_weekend = day.weekday() in WEEKEND_DAYS

            segment_counts = {category: 0 for category in PayCategory}
            if is_holiday:
                segment_counts[PayCategory.BANK_HOLIDAY] = self._count_minutes(
                    arrival, total_minutes, segment.start, segment.end
                )
            else:
                run_start = segment.start
                while run_start < segment.end:
                    run_end = min(self.calendar.next_hour_boundary(run_start), segment.end)
                    hour = self.calendar.local_hour(run_start)
                    if is_night_hour(hour, policy.night_start_hour, policy.night_end_hour):
                        category = PayCategory.NIGHT
                    elif is_weekend:
                        category = PayCategory.WEEKEND
                    else:
                        category = PayCategory.REGULAR
                    segment_counts[category] += self._count_minutes(
                        arrival, total_minutes, run_start, run_end
                    )
                    run_start = run_end

            for category, count in segment_counts.items():
                result.minutes[category] += count

            result.segments.append(
                {
                    "date": day.isoformat(),
                    "start": segment.start.isoformat(),
                    "end": segment.end.isoformat(),
                    "is_bank_holiday": is_holiday,
                    "is_weekend": is_weekend,
                    "minutes": {
                        str(category): count
                        for category, count in segment_counts.items()
                        if count
                    },
                }
            )

        logger.debug(
            "Classified shift minutes",
            extra={
                "company_id": company_id,
                "total_minutes": total_minutes,
                "segments": len(segments),
            },
        )
        return result

    @staticmethod
    def _count_minutes(arrival, total_minutes, start, end):
        """Number of minute starts ``arrival + k min`` inside [start, end)."""
        first = _ceil_minutes(start - arrival)
        last = min(_ceil_minutes(end - arrival), total_minutes)
        return max(0, last - first)
