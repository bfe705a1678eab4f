from django.core.management.base import BaseCommand

from payroll.services.rate_resolver import initialize_default_pay_rates


class Command(BaseCommand):
    help = "Creates the default pay-rate policy for a company if it has none"

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            type=int,
            required=True,
            help="Company ID to initialize",
        )

    def handle(self, *args, **options):
        company_id = options["company"]
        policy, created = initialize_default_pay_rates(company_id)

        if created:
            self.stdout.write(
                self.style.SUCCESS(
                    f"Created default pay rates for company {company_id} "
                    f"(base £{policy.base_rate}/h)"
                )
            )
        else:
            self.stdout.write(
                f"Company {company_id} already has default pay rates (id {policy.pk})"
            )
