from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.utils import timezone


class PayRatePolicy(models.Model):
    """
    Hourly rates and thresholds used to price a driver's shift.

    A policy with ``driver_id`` set overrides the company default (``driver_id``
    is NULL) for that driver. Only one policy may be active per scope.
    """

    DEFAULT_BASE_RATE = Decimal("12.00")
    DEFAULT_NIGHT_RATE = Decimal("15.00")
    DEFAULT_WEEKEND_RATE = Decimal("18.00")
    DEFAULT_BANK_HOLIDAY_RATE = Decimal("24.00")
    DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.50")
    DEFAULT_NIGHT_START_HOUR = 22
    DEFAULT_NIGHT_END_HOUR = 6
    DEFAULT_DAILY_OVERTIME_THRESHOLD = 480  # 8 hours in minutes

    company_id = models.PositiveBigIntegerField(db_index=True)
    driver_id = models.PositiveBigIntegerField(
        null=True, blank=True, help_text="Empty for the company default policy"
    )

    # Rates (per hour)
    base_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_BASE_RATE,
        validators=[MinValueValidator(Decimal("0"))],
    )
    night_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_NIGHT_RATE,
        validators=[MinValueValidator(Decimal("0"))],
    )
    weekend_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_WEEKEND_RATE,
        validators=[MinValueValidator(Decimal("0"))],
    )
    bank_holiday_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_BANK_HOLIDAY_RATE,
        validators=[MinValueValidator(Decimal("0"))],
    )
    overtime_multiplier = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_OVERTIME_MULTIPLIER,
        validators=[MinValueValidator(Decimal("1"))],
        help_text="Applied to the base rate for overtime minutes",
    )

    # Time thresholds
    night_start_hour = models.PositiveSmallIntegerField(
        default=DEFAULT_NIGHT_START_HOUR, validators=[MaxValueValidator(23)]
    )
    night_end_hour = models.PositiveSmallIntegerField(
        default=DEFAULT_NIGHT_END_HOUR, validators=[MaxValueValidator(23)]
    )
    daily_overtime_threshold = models.PositiveIntegerField(
        default=DEFAULT_DAILY_OVERTIME_THRESHOLD,
        help_text="Worked minutes per shift before overtime applies",
    )

    is_active = models.BooleanField(
        default=True, help_text="Whether this policy is currently used for calculations"
    )
    effective_from = models.DateTimeField(default=timezone.now)
    effective_to = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def clean(self):
        errors = {}

        for field in ("night_start_hour", "night_end_hour"):
            value = getattr(self, field)
            if value is None or not 0 <= value <= 23:
                errors[field] = "Hour must be between 0 and 23."

        for field in ("base_rate", "night_rate", "weekend_rate", "bank_holiday_rate"):
            value = getattr(self, field)
            if value is None or value < 0:
                errors[field] = "Rate cannot be negative."

        if self.overtime_multiplier is None or self.overtime_multiplier < 1:
            errors["overtime_multiplier"] = "Overtime multiplier cannot be below 1."

        if (
            self.effective_from
            and self.effective_to
            and self.effective_to < self.effective_from
        ):
            errors["effective_to"] = "Effective end must not precede effective start."

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self.clean()

        with transaction.atomic():
            # Only one active policy per (company, driver) scope
            if self.is_active:
                PayRatePolicy.objects.filter(
                    company_id=self.company_id, driver_id=self.driver_id, is_active=True
                ).exclude(pk=self.pk).update(is_active=False)
            return super().save(*args, **kwargs)

    @property
    def is_company_default(self):
        return self.driver_id is None

    def __str__(self):
        scope = "default" if self.is_company_default else f"driver {self.driver_id}"
        return f"Pay rates for company {self.company_id} ({scope})"

    class Meta:
        verbose_name = "Pay Rate Policy"
        verbose_name_plural = "Pay Rate Policies"
        ordering = ["company_id", "driver_id", "-effective_from"]
        constraints = [
            models.UniqueConstraint(
                fields=["company_id"],
                condition=models.Q(is_active=True, driver_id__isnull=True),
                name="unique_active_default_pay_rate_per_company",
            ),
            models.UniqueConstraint(
                fields=["company_id", "driver_id"],
                condition=models.Q(is_active=True, driver_id__isnull=False),
                name="unique_active_pay_rate_per_driver",
            ),
        ]


class WageCalculation(models.Model):
    """Stored wage breakdown for one shift, overwritten on recalculation"""

    shift_id = models.PositiveBigIntegerField(unique=True)
    company_id = models.PositiveBigIntegerField(db_index=True)
    driver_id = models.PositiveBigIntegerField(db_index=True)
    pay_rate = models.ForeignKey(
        PayRatePolicy,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="wage_calculations",
        help_text="Policy used for the latest calculation",
    )

    # Minute partition of the shift
    regular_minutes = models.PositiveIntegerField(default=0)
    night_minutes = models.PositiveIntegerField(default=0)
    weekend_minutes = models.PositiveIntegerField(default=0)
    bank_holiday_minutes = models.PositiveIntegerField(default=0)
    # Overlay, not part of the partition above
    overtime_minutes = models.PositiveIntegerField(default=0)

    regular_pay = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    night_pay = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    weekend_pay = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    bank_holiday_pay = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    overtime_pay = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    total_pay = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )

    calculation_details = models.JSONField(
        default=dict, blank=True, help_text="Detailed breakdown of calculation"
    )

    calculated_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Wage Calculation"
        verbose_name_plural = "Wage Calculations"
        ordering = ["-calculated_at"]
        indexes = [
            models.Index(fields=["company_id", "driver_id"], name="wage_calc_company_driver_idx"),
            models.Index(fields=["-calculated_at"], name="wage_calc_calculated_idx"),
        ]

    def __str__(self):
        return f"Shift {self.shift_id} - driver {self.driver_id} - £{self.total_pay}"

    @property
    def total_minutes(self):
        """Elapsed whole minutes of the shift"""
        return (
            self.regular_minutes
            + self.night_minutes
            + self.weekend_minutes
            + self.bank_holiday_minutes
        )
