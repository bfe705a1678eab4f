"""
End-to-end tests for WageCalculationService against the test database.

Covers the reference scenarios (weekday, Saturday, bank holiday), the minute
partition, idempotent recalculation and the error paths.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.db import DatabaseError
from django.test import TestCase

from integrations.models import BankHoliday
from integrations.services.bank_holiday_oracle import BankHolidayOracle
from payroll.exceptions import InvalidShiftError, PayRateNotConfiguredError
from payroll.models import PayRatePolicy, WageCalculation
from payroll.services.wage_calculation_service import (
    WageCalculationService,
    calculate_wages,
    get_wage_calculation,
)
from payroll.tests.helpers import london

COMPANY_ID = 10
DRIVER_ID = 20


class WageCalculationServiceTest(TestCase):
    def setUp(self):
        self.policy = PayRatePolicy.objects.create(
            company_id=COMPANY_ID, night_rate=Decimal("20.00")
        )
        self.service = WageCalculationService(oracle=BankHolidayOracle(auto_sync=False))

    def calculate(self, shift_id, arrival, departure, driver_id=DRIVER_ID):
        return self.service.calculate(shift_id, COMPANY_ID, driver_id, arrival, departure)

    def assert_partition(self, breakdown, arrival, departure):
        expected = (departure - arrival) // timedelta(minutes=1)
        self.assertEqual(
            breakdown["regular_minutes"]
            + breakdown["night_minutes"]
            + breakdown["weekend_minutes"]
            + breakdown["bank_holiday_minutes"],
            expected,
        )
        self.assertEqual(breakdown["total_minutes"], expected)

    def test_monday_day_shift(self):
        arrival, departure = london(2026, 6, 15, 8), london(2026, 6, 15, 16)

        breakdown = self.calculate(1, arrival, departure)

        self.assertEqual(breakdown["regular_minutes"], 480)
        self.assertEqual(breakdown["night_minutes"], 0)
        self.assertEqual(breakdown["weekend_minutes"], 0)
        self.assertEqual(breakdown["bank_holiday_minutes"], 0)
        self.assertEqual(breakdown["overtime_minutes"], 0)
        self.assertEqual(breakdown["regular_pay"], Decimal("96.00"))
        self.assertEqual(breakdown["total_pay"], Decimal("96.00"))
        self.assert_partition(breakdown, arrival, departure)

    def test_saturday_long_shift(self):
        arrival, departure = london(2026, 6, 20, 6), london(2026, 6, 20, 18)

        breakdown = self.calculate(2, arrival, departure)

        self.assertEqual(breakdown["weekend_minutes"], 720)
        self.assertEqual(breakdown["regular_minutes"], 0)
        self.assertEqual(breakdown["night_minutes"], 0)
        self.assertEqual(breakdown["overtime_minutes"], 210)
        self.assertEqual(breakdown["weekend_pay"], Decimal("216.00"))
        self.assertEqual(breakdown["overtime_pay"], Decimal("63.00"))
        self.assertEqual(breakdown["total_pay"], Decimal("279.00"))

    def test_shift_on_bank_holiday(self):
        BankHoliday.objects.create(
            company_id=COMPANY_ID, name="Early May bank holiday", date=date(2026, 5, 4)
        )
        arrival, departure = london(2026, 5, 4, 4), london(2026, 5, 4, 12)

        breakdown = self.calculate(3, arrival, departure)

        self.assertEqual(breakdown["bank_holiday_minutes"], 480)
        self.assertEqual(breakdown["regular_minutes"], 0)
        self.assertEqual(breakdown["night_minutes"], 0)
        self.assertEqual(breakdown["weekend_minutes"], 0)
        self.assertEqual(breakdown["bank_holiday_pay"], Decimal("192.00"))

    def test_weekend_bank_holiday(self):
        BankHoliday.objects.create(
            company_id=COMPANY_ID, name="Company anniversary", date=date(2026, 6, 20)
        )

        breakdown = self.calculate(4, london(2026, 6, 20, 6), london(2026, 6, 20, 18))

        self.assertEqual(breakdown["bank_holiday_minutes"], 720)
        self.assertEqual(breakdown["weekend_minutes"], 0)
        # Overtime is still paid on top
        self.assertEqual(breakdown["overtime_minutes"], 210)

    def test_night_shift_across_midnight(self):
        breakdown = self.calculate(5, london(2026, 6, 15, 23), london(2026, 6, 16, 1))

        self.assertEqual(breakdown["night_minutes"], 120)
        self.assertEqual(breakdown["night_pay"], Decimal("40.00"))

    def test_partition_with_seconds_and_dst(self):
        arrival = london(2026, 10, 23, 18, 12, 41)
        departure = london(2026, 10, 25, 9, 3, 7)

        breakdown = self.calculate(6, arrival, departure)

        self.assert_partition(breakdown, arrival, departure)

    def test_recalculation_is_idempotent(self):
        arrival, departure = london(2026, 6, 19, 20), london(2026, 6, 20, 7)

        first = self.calculate(7, arrival, departure)
        second = self.calculate(7, arrival, departure)

        self.assertEqual(WageCalculation.objects.filter(shift_id=7).count(), 1)
        for key in first:
            if key != "calculated_at":
                self.assertEqual(first[key], second[key], key)

    def test_recalculation_after_rate_change_overwrites(self):
        arrival, departure = london(2026, 6, 15, 8), london(2026, 6, 15, 16)
        self.calculate(8, arrival, departure)

        PayRatePolicy.objects.create(
            company_id=COMPANY_ID, base_rate=Decimal("13.00"), night_rate=Decimal("20.00")
        )
        breakdown = self.calculate(8, arrival, departure)

        self.assertEqual(breakdown["regular_pay"], Decimal("104.00"))
        self.assertEqual(WageCalculation.objects.get(shift_id=8).regular_pay, Decimal("104.00"))

    def test_driver_specific_rates(self):
        PayRatePolicy.objects.create(
            company_id=COMPANY_ID, driver_id=DRIVER_ID,
            base_rate=Decimal("15.00"), night_rate=Decimal("20.00"),
        )

        breakdown = self.calculate(9, london(2026, 6, 15, 8), london(2026, 6, 15, 10))

        self.assertEqual(breakdown["regular_pay"], Decimal("30.00"))

    def test_calculation_details(self):
        self.calculate(10, london(2026, 6, 15, 23), london(2026, 6, 16, 1))

        details = WageCalculation.objects.get(shift_id=10).calculation_details
        self.assertEqual(details["timezone"], "Europe/London")
        self.assertEqual(details["rates"]["night_rate"], "20.00")
        self.assertEqual(len(details["segments"]), 2)
        self.assertEqual(details["overtime"]["overtime_minutes"], 0)

    def test_missing_pay_rate_is_fatal(self):
        with self.assertRaises(PayRateNotConfiguredError):
            self.service.calculate(11, COMPANY_ID + 1, DRIVER_ID, london(2026, 6, 15, 8), london(2026, 6, 15, 16))

        self.assertFalse(WageCalculation.objects.filter(shift_id=11).exists())

    def test_invalid_shift_is_rejected_before_work(self):
        resolver = MagicMock()
        service = WageCalculationService(rate_resolver=resolver, oracle=BankHolidayOracle(auto_sync=False))

        with self.assertRaises(InvalidShiftError):
            service.calculate(12, COMPANY_ID, DRIVER_ID, london(2026, 6, 15, 16), london(2026, 6, 15, 8))

        resolver.resolve.assert_not_called()
        self.assertFalse(WageCalculation.objects.exists())

    def test_naive_datetimes_are_read_in_reference_timezone(self):
        breakdown = self.calculate(13, datetime(2026, 6, 15, 8), datetime(2026, 6, 15, 16))

        self.assertEqual(breakdown["regular_minutes"], 480)

    def test_persistence_failure_propagates(self):
        store = MagicMock()
        store.save.side_effect = DatabaseError("connection lost")
        service = WageCalculationService(oracle=BankHolidayOracle(auto_sync=False), store=store)

        with self.assertRaises(DatabaseError):
            service.calculate(14, COMPANY_ID, DRIVER_ID, london(2026, 6, 15, 8), london(2026, 6, 15, 16))

    def test_get(self):
        self.assertIsNone(self.service.get(15))

        self.calculate(15, london(2026, 6, 15, 8), london(2026, 6, 15, 16))

        self.assertEqual(self.service.get(15)["total_pay"], Decimal("96.00"))


class WageCalculationHolidaySyncTest(TestCase):
    """Bank holiday refresh during a calculation"""

    def setUp(self):
        PayRatePolicy.objects.create(company_id=COMPANY_ID, night_rate=Decimal("20.00"))

    def test_oracle_prepared_for_years_touched(self):
        oracle = BankHolidayOracle(sync_service=MagicMock(), auto_sync=True)
        oracle.sync_service.sync_year.return_value = 0
        service = WageCalculationService(oracle=oracle)

        service.calculate(1, COMPANY_ID, DRIVER_ID, london(2026, 12, 31, 22), london(2027, 1, 1, 6))

        synced_years = [c.args[1] for c in oracle.sync_service.sync_year.call_args_list]
        self.assertEqual(synced_years, [2026, 2027])

    @patch("integrations.services.gov_uk_api_client.time.sleep")
    @patch("integrations.services.gov_uk_api_client.requests.get")
    def test_feed_outage_does_not_fail_calculation(self, mock_get, mock_sleep):
        import requests

        mock_get.side_effect = requests.exceptions.ConnectionError("offline")
        BankHoliday.objects.create(
            company_id=COMPANY_ID, name="Christmas Day", date=date(2026, 12, 25)
        )
        service = WageCalculationService(oracle=BankHolidayOracle(auto_sync=True))

        breakdown = service.calculate(
            2, COMPANY_ID, DRIVER_ID, london(2026, 12, 25, 8), london(2026, 12, 25, 16)
        )

        self.assertEqual(breakdown["bank_holiday_minutes"], 480)

    @patch("integrations.services.gov_uk_api_client.requests.get")
    def test_feed_holidays_are_imported_and_used(self, mock_get):
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.return_value = {
            "england-and-wales": {
                "division": "england-and-wales",
                "events": [{"title": "Spring bank holiday", "date": "2026-05-25"}],
            }
        }
        mock_get.return_value = response
        service = WageCalculationService(oracle=BankHolidayOracle(auto_sync=True))

        breakdown = service.calculate(
            3, COMPANY_ID, DRIVER_ID, london(2026, 5, 25, 8), london(2026, 5, 25, 12)
        )

        self.assertEqual(breakdown["bank_holiday_minutes"], 240)
        self.assertTrue(
            BankHoliday.objects.filter(company_id=COMPANY_ID, date=date(2026, 5, 25)).exists()
        )

    @patch("integrations.services.gov_uk_api_client.requests.get")
    def test_deleted_holiday_stays_deleted_with_cached_feed(self, mock_get):
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.return_value = {
            "england-and-wales": {
                "division": "england-and-wales",
                "events": [{"title": "Spring bank holiday", "date": "2026-05-25"}],
            }
        }
        mock_get.return_value = response
        arrival, departure = london(2026, 5, 25, 8), london(2026, 5, 25, 12)

        WageCalculationService(oracle=BankHolidayOracle(auto_sync=True)).calculate(
            4, COMPANY_ID, DRIVER_ID, arrival, departure
        )
        BankHoliday.objects.filter(company_id=COMPANY_ID, date=date(2026, 5, 25)).delete()
        breakdown = WageCalculationService(oracle=BankHolidayOracle(auto_sync=True)).calculate(
            5, COMPANY_ID, DRIVER_ID, arrival, departure
        )

        self.assertEqual(mock_get.call_count, 1)
        self.assertEqual(breakdown["bank_holiday_minutes"], 0)
        self.assertEqual(breakdown["regular_minutes"], 240)
        self.assertFalse(
            BankHoliday.objects.filter(company_id=COMPANY_ID, date=date(2026, 5, 25)).exists()
        )

    @patch("integrations.services.gov_uk_api_client.time.sleep")
    @patch("integrations.services.gov_uk_api_client.requests.get")
    def test_feed_outage_is_not_retried_on_every_calculation(self, mock_get, mock_sleep):
        import requests

        mock_get.side_effect = requests.exceptions.Timeout("slow")

        for shift_id in (6, 7, 8):
            service = WageCalculationService(oracle=BankHolidayOracle(auto_sync=True))
            service.calculate(
                shift_id, COMPANY_ID, DRIVER_ID,
                london(2026, 12, 31, 22), london(2027, 1, 1, 6),
            )

        self.assertEqual(mock_get.call_count, 1)
        mock_sleep.assert_not_called()
        self.assertEqual(WageCalculation.objects.filter(shift_id__in=(6, 7, 8)).count(), 3)


class ModuleLevelFunctionsTest(TestCase):
    def test_calculate_and_get(self):
        PayRatePolicy.objects.create(company_id=COMPANY_ID, night_rate=Decimal("20.00"))

        breakdown = calculate_wages(
            50, COMPANY_ID, DRIVER_ID, london(2026, 6, 15, 8), london(2026, 6, 15, 16)
        )

        self.assertEqual(breakdown["shift_id"], 50)
        self.assertEqual(get_wage_calculation(50)["total_pay"], Decimal("96.00"))
        self.assertIsNone(get_wage_calculation(51))
