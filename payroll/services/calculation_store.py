"""
Persistence of wage breakdowns keyed by shift
"""

import logging

from django.db import transaction
from django.utils import timezone

from payroll.models import WageCalculation

logger = logging.getLogger(__name__)


class CalculationStore:
    """Upserts one WageCalculation row per shift. Database errors propagate."""

    def save(
        self,
        shift_id,
        company_id,
        driver_id,
        pay_rate,
        minutes,
        overtime_minutes,
        amounts,
        details=None,
    ):
        """
        Insert or overwrite the breakdown of a shift.

        Args:
            minutes (dict): Category minute counts keyed by field name
            amounts (WageAmounts): Unrounded amounts; rounded here

        Returns:
            tuple: (WageCalculation, created)
        """
        defaults = {
            "company_id": company_id,
            "driver_id": driver_id,
            "pay_rate": pay_rate,
            "overtime_minutes": overtime_minutes,
            "calculation_details": details or {},
            "calculated_at": timezone.now(),
            **minutes,
            **amounts.rounded(),
        }

        with transaction.atomic():
            calculation, created = WageCalculation.objects.update_or_create(
                shift_id=shift_id, defaults=defaults
            )

        logger.info(
            f"{'Created' if created else 'Updated'} wage calculation for shift {shift_id}",
            extra={"shift_id": shift_id, "company_id": company_id},
        )
        return calculation, created

    def get(self, shift_id):
        return WageCalculation.objects.filter(shift_id=shift_id).first()
