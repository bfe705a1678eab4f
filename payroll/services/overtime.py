"""
Daily overtime for a single shift
"""

from dataclasses import dataclass
from datetime import timedelta

ONE_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class OvertimeResult:
    total_minutes: int
    break_minutes: int
    net_minutes: int
    threshold_minutes: int
    overtime_minutes: int

    def as_dict(self):
        return {
            "total_minutes": self.total_minutes,
            "break_minutes": self.break_minutes,
            "net_minutes": self.net_minutes,
            "threshold_minutes": self.threshold_minutes,
            "overtime_minutes": self.overtime_minutes,
        }


class OvertimeCalculator:
    """
    Overtime from elapsed time only.

    Shifts longer than six hours lose a 30 minute unpaid break before the
    daily threshold is applied. The category minutes are left untouched:
    overtime is paid on top of them.
    """

    BREAK_MINUTES = 30
    BREAK_AFTER_MINUTES = 360

    @staticmethod
    def elapsed_minutes(arrival, departure):
        """Whole minutes between two instants, rounded down."""
        return max(0, (departure - arrival) // ONE_MINUTE)

    def calculate(self, total_minutes, daily_threshold):
        break_minutes = (
            self.BREAK_MINUTES if total_minutes > self.BREAK_AFTER_MINUTES else 0
        )
        net_minutes = total_minutes - break_minutes
        return OvertimeResult(
            total_minutes=total_minutes,
            break_minutes=break_minutes,
            net_minutes=net_minutes,
            threshold_minutes=daily_threshold,
            overtime_minutes=max(0, net_minutes - daily_threshold),
        )
