"""
Bank Holiday Oracle - answers "is this civil date a holiday for this company?"

Reads only from the BankHoliday table. Refreshing that table from the public
calendar is a separate, best-effort step (``prepare``) whose failure leaves
the read path working on whatever rows are already stored.
"""

import logging

from django.conf import settings

from core.logging_utils import err_tag
from integrations.models import BankHoliday
from integrations.services.gov_uk_api_client import BankHolidayAPIClient
from integrations.services.holiday_sync_service import BankHolidaySyncService

logger = logging.getLogger(__name__)


class BankHolidayOracle:
    def __init__(self, sync_service=None, auto_sync=None):
        self._sync_service = sync_service
        if auto_sync is None:
            auto_sync = settings.BANK_HOLIDAYS.get("AUTO_SYNC", True)
        self.auto_sync = auto_sync

    @property
    def sync_service(self):
        if self._sync_service is None:
            # One download attempt per refresh inside a calculation
            self._sync_service = BankHolidaySyncService(
                api_client=BankHolidayAPIClient(max_retries=1)
            )
        return self._sync_service

    def prepare(self, company_id, years):
        """
        Import the public holidays of ``years`` for the company, once per
        downloaded feed.

        Never raises: a failed refresh is logged and the stored rows are used.
        """
        if not self.auto_sync:
            return

        for year in sorted(set(years)):
            try:
                self.sync_service.sync_year(company_id, year, new_feed_only=True)
            except Exception as e:
                logger.error(
                    "Bank holiday refresh failed, continuing with stored holidays",
                    extra={"err": err_tag(e), "company_id": company_id, "year": year},
                )

    def is_bank_holiday(self, company_id, day):
        """
        Args:
            company_id (int): Company whose calendar applies
            day (date): Civil date in the wage calculation timezone

        Returns:
            bool
        """
        holidays = BankHoliday.objects.for_company(company_id)
        return (
            holidays.covering(day).exists()
            or holidays.recurring_on(day).exists()
        )

    def holiday_name(self, company_id, day):
        holidays = BankHoliday.objects.for_company(company_id)
        holiday = (
            holidays.covering(day).first() or holidays.recurring_on(day).first()
        )
        return holiday.name if holiday else None
