from datetime import timedelta

from django.db import models


class BankHolidayQuerySet(models.QuerySet):
    def for_company(self, company_id):
        return self.filter(company_id=company_id)

    def covering(self, day):
        """Rows whose date falls on ``day`` (half-open range [day, day + 1))."""
        return self.filter(date__gte=day, date__lt=day + timedelta(days=1))

    def recurring_on(self, day):
        """Recurring rows for the same month/day, first observed on or before ``day``."""
        return self.filter(
            is_recurring=True,
            date__month=day.month,
            date__day=day.day,
            date__lte=day,
        )


class BankHoliday(models.Model):
    """
    A non-working calendar date for one company.

    Rows imported from the public calendar and local overrides share this
    table. There is no unique key on (company, date); writers
    check for an existing row covering the day before inserting.
    """

    SOURCE_GOV_UK = "gov_uk"
    SOURCE_MANUAL = "manual"
    SOURCE_CHOICES = [
        (SOURCE_GOV_UK, "GOV.UK bank holidays"),
        (SOURCE_MANUAL, "Added locally"),
    ]

    company_id = models.PositiveBigIntegerField(db_index=True)
    name = models.CharField(max_length=100)
    date = models.DateField()
    is_recurring = models.BooleanField(
        default=False, help_text="Repeats on the same day and month every year"
    )
    source = models.CharField(
        max_length=20, choices=SOURCE_CHOICES, default=SOURCE_MANUAL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = BankHolidayQuerySet.as_manager()

    def __str__(self):
        return f"{self.name} - {self.date}"

    class Meta:
        verbose_name = "Bank Holiday"
        verbose_name_plural = "Bank Holidays"
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["company_id", "date"], name="bank_holiday_company_date_idx"),
        ]
