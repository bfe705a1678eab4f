# Generated manually on 2026-10-18

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PayRatePolicy',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('company_id', models.PositiveBigIntegerField(db_index=True)),
                ('driver_id', models.PositiveBigIntegerField(blank=True, help_text='Empty for the company default policy', null=True)),
                ('base_rate', models.DecimalField(decimal_places=2, default=Decimal('12.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('night_rate', models.DecimalField(decimal_places=2, default=Decimal('15.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('weekend_rate', models.DecimalField(decimal_places=2, default=Decimal('18.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('bank_holiday_rate', models.DecimalField(decimal_places=2, default=Decimal('24.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('overtime_multiplier', models.DecimalField(decimal_places=2, default=Decimal('1.50'), help_text='Applied to the base rate for overtime minutes', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('1'))])),
                ('night_start_hour', models.PositiveSmallIntegerField(default=22, validators=[django.core.validators.MaxValueValidator(23)])),
                ('night_end_hour', models.PositiveSmallIntegerField(default=6, validators=[django.core.validators.MaxValueValidator(23)])),
                ('daily_overtime_threshold', models.PositiveIntegerField(default=480, help_text='Worked minutes per shift before overtime applies')),
                ('is_active', models.BooleanField(default=True, help_text='Whether this policy is currently used for calculations')),
                ('effective_from', models.DateTimeField(default=django.utils.timezone.now)),
                ('effective_to', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Pay Rate Policy',
                'verbose_name_plural': 'Pay Rate Policies',
                'ordering': ['company_id', 'driver_id', '-effective_from'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('driver_id__isnull', True), ('is_active', True)), fields=('company_id',), name='unique_active_default_pay_rate_per_company'),
                    models.UniqueConstraint(condition=models.Q(('driver_id__isnull', False), ('is_active', True)), fields=('company_id', 'driver_id'), name='unique_active_pay_rate_per_driver'),
                ],
            },
        ),
        migrations.CreateModel(
            name='WageCalculation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('shift_id', models.PositiveBigIntegerField(unique=True)),
                ('company_id', models.PositiveBigIntegerField(db_index=True)),
                ('driver_id', models.PositiveBigIntegerField(db_index=True)),
                ('regular_minutes', models.PositiveIntegerField(default=0)),
                ('night_minutes', models.PositiveIntegerField(default=0)),
                ('weekend_minutes', models.PositiveIntegerField(default=0)),
                ('bank_holiday_minutes', models.PositiveIntegerField(default=0)),
                ('overtime_minutes', models.PositiveIntegerField(default=0)),
                ('regular_pay', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('night_pay', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('weekend_pay', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('bank_holiday_pay', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('overtime_pay', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('total_pay', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('calculation_details', models.JSONField(blank=True, default=dict, help_text='Detailed breakdown of calculation')),
                ('calculated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('pay_rate', models.ForeignKey(blank=True, help_text='Policy used for the latest calculation', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='wage_calculations', to='payroll.payratepolicy')),
            ],
            options={
                'verbose_name': 'Wage Calculation',
                'verbose_name_plural': 'Wage Calculations',
                'ordering': ['-calculated_at'],
                'indexes': [
                    models.Index(fields=['company_id', 'driver_id'], name='wage_calc_company_driver_idx'),
                    models.Index(fields=['-calculated_at'], name='wage_calc_calculated_idx'),
                ],
            },
        ),
    ]
