import logging

from django.core.management.base import BaseCommand
from django.utils import timezone

from integrations.services.holiday_sync_service import BankHolidaySyncService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Imports public bank holidays from GOV.UK for one company"

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            type=int,
            required=True,
            help="Company ID the holidays belong to",
        )
        parser.add_argument(
            "--year",
            type=int,
            help="Year to sync holidays for (defaults to current year)",
        )
        parser.add_argument(
            "--future",
            type=int,
            default=1,
            help="Number of future years to sync (defaults to 1)",
        )

    def handle(self, *args, **options):
        company_id = options["company"]
        year = options["year"] or timezone.localdate().year
        future_years = max(0, options["future"])

        service = BankHolidaySyncService()
        total_created = 0

        for target_year in range(year, year + future_years + 1):
            self.stdout.write(f"Syncing bank holidays for year {target_year}")
            created = service.sync_year(company_id, target_year)
            self.stdout.write(f"Year {target_year}: Created {created}")
            total_created += created

        self.stdout.write(
            self.style.SUCCESS(
                f"Successfully synced bank holidays for company {company_id}: "
                f"{total_created} created"
            )
        )
