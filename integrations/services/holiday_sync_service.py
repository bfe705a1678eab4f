"""
Bank Holiday Synchronization Service - imports the public calendar per company

This service is responsible for:
- Pulling one year of holidays from the GOV.UK client
- Inserting the ones a company does not have yet

Rows that already cover a day (imported earlier or added locally) are never
touched, so running a sync any number of times yields the same table.
"""

import logging
from datetime import datetime

from django.db import transaction

from core.logging_utils import err_tag
from integrations.models import BankHoliday
from integrations.services.gov_uk_api_client import (
    BankHolidayAPIClient,
    BankHolidayFetchError,
)

logger = logging.getLogger(__name__)


class BankHolidaySyncService:
    """Idempotent import of public bank holidays into BankHoliday rows."""

    def __init__(self, api_client=None):
        self.api_client = api_client or BankHolidayAPIClient()

    def sync_year(self, company_id, year, new_feed_only=False):
        """
        Import one year of holidays for a company.

        Args:
            company_id (int): Company the rows belong to
            year (int): Calendar year
            new_feed_only (bool): Skip the import when the cached feed was
                already imported for this company and year. Rows deleted
                since then stay deleted until the next download.

        Returns:
            int: Number of rows created. 0 when the calendar is unavailable.
        """
        feed_cache = self.api_client.feed_cache
        if new_feed_only and feed_cache.is_imported(company_id, year):
            logger.debug(
                f"Bank holiday feed already imported for {year}",
                extra={"company_id": company_id, "year": year},
            )
            return 0

        try:
            events = self.api_client.events_for_year(year)
        except BankHolidayFetchError as e:
            logger.warning(
                "Bank holiday calendar unavailable, using stored holidays",
                extra={"err": err_tag(e), "company_id": company_id, "year": year},
            )
            return 0

        created_count = 0
        for event in events:
            try:
                holiday_date = datetime.strptime(event["date"], "%Y-%m-%d").date()
            except (KeyError, TypeError, ValueError) as e:
                logger.error(
                    "Skipping malformed bank holiday event",
                    extra={"err": err_tag(e), "event": event},
                )
                continue

            if self._insert_if_missing(company_id, holiday_date, event.get("title")):
                created_count += 1

        feed_cache.mark_imported(company_id, year)

        logger.info(
            f"Bank holiday sync completed for {year}: created={created_count}",
            extra={"company_id": company_id, "year": year},
        )
        return created_count

    def sync_years(self, company_id, years):
        return {year: self.sync_year(company_id, year) for year in years}

    @staticmethod
    def _insert_if_missing(company_id, holiday_date, title):
        with transaction.atomic():
            exists = (
                BankHoliday.objects.for_company(company_id)
                .covering(holiday_date)
                .exists()
            )
            if exists:
                return False

            BankHoliday.objects.create(
                company_id=company_id,
                name=(title or "Bank holiday")[:100],
                date=holiday_date,
                is_recurring=False,
                source=BankHoliday.SOURCE_GOV_UK,
            )
            logger.debug(f"Created bank holiday: {title} on {holiday_date}")
            return True
