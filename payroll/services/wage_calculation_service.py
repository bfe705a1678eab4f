"""
Wage calculation orchestrator.

This module provides WageCalculationService, the entry point for pricing a
driver's shift. It wires the engine components together:

    RateResolver -> ShiftSegmenter -> BankHolidayOracle -> MinuteClassifier
    -> OvertimeCalculator -> WageComposer -> CalculationStore

and returns the breakdown as stored. A failed bank holiday refresh never fails
a calculation; a missing pay rate, an invalid shift and database errors do.
"""

import logging
import time
from typing import Optional

from core.logging_utils import shift_log_extra
from integrations.services.bank_holiday_oracle import BankHolidayOracle
from payroll.civil_calendar import CivilCalendar
from payroll.shift_segmenter import ShiftSegmenter

from .calculation_store import CalculationStore
from .contracts import WageBreakdown, breakdown_from_calculation, validate_wage_breakdown
from .minute_classifier import MinuteClassifier
from .overtime import OvertimeCalculator
from .rate_resolver import RateResolver
from .wage_composer import WageComposer

logger = logging.getLogger(__name__)


class WageCalculationService:
    def __init__(
        self,
        rate_resolver=None,
        oracle=None,
        calendar=None,
        overtime_calculator=None,
        composer=None,
        store=None,
    ):
        self.calendar = calendar or CivilCalendar()
        self.rate_resolver = rate_resolver or RateResolver()
        self.oracle = oracle or BankHolidayOracle()
        self.segmenter = ShiftSegmenter(self.calendar)
        self.classifier = MinuteClassifier(self.oracle, self.calendar)
        self.overtime_calculator = overtime_calculator or OvertimeCalculator()
        self.composer = composer or WageComposer()
        self.store = store or CalculationStore()

    def calculate(
        self, shift_id, company_id, driver_id, arrival, departure
    ) -> WageBreakdown:
        """
        Price a shift and store the result.

        Args:
            shift_id: Identity of the shift; recalculating overwrites its row
            company_id: Company of the shift
            driver_id: Driver of the shift
            arrival: Clock-in instant
            departure: Clock-out instant

        Returns:
            WageBreakdown: the stored breakdown (amounts rounded to 2 dp)

        Raises:
            InvalidShiftError: departure is not after arrival
            PayRateNotConfiguredError: no active policy for driver or company
        """
        start_time = time.time()
        log_extra = shift_log_extra(shift_id, company_id, driver_id)

        arrival, departure = self.segmenter.validate(arrival, departure)
        policy = self.rate_resolver.resolve(company_id, driver_id)
        segments = self.segmenter.split(arrival, departure)

        self.oracle.prepare(company_id, {segment.local_date.year for segment in segments})

        classification = self.classifier.classify(company_id, arrival, segments, policy)
        overtime = self.overtime_calculator.calculate(
            classification.total_minutes, policy.daily_overtime_threshold
        )
        amounts = self.composer.compose(
            classification.minutes, overtime.overtime_minutes, policy
        )

        details = {
            "timezone": self.calendar.zone,
            "arrival": arrival.isoformat(),
            "departure": departure.isoformat(),
            "rates": self.composer.rates_snapshot(policy),
            "segments": classification.segments,
            "overtime": overtime.as_dict(),
            "unrounded_total_pay": str(amounts.total_pay),
        }

        calculation, created = self.store.save(
            shift_id=shift_id,
            company_id=company_id,
            driver_id=driver_id,
            pay_rate=policy,
            minutes=classification.as_fields(),
            overtime_minutes=overtime.overtime_minutes,
            amounts=amounts,
            details=details,
        )

        breakdown = validate_wage_breakdown(breakdown_from_calculation(calculation))

        logger.info(
            f"Wage calculation completed in {time.time() - start_time:.3f}s",
            extra={
                **log_extra,
                "total_minutes": breakdown["total_minutes"],
                "overtime_minutes": breakdown["overtime_minutes"],
                "created": created,
            },
        )
        return breakdown

    def get(self, shift_id) -> Optional[WageBreakdown]:
        calculation = self.store.get(shift_id)
        if calculation is None:
            return None
        return breakdown_from_calculation(calculation)


def calculate_wages(shift_id, company_id, driver_id, arrival, departure) -> WageBreakdown:
    return WageCalculationService().calculate(
        shift_id, company_id, driver_id, arrival, departure
    )


def get_wage_calculation(shift_id) -> Optional[WageBreakdown]:
    return WageCalculationService().get(shift_id)
