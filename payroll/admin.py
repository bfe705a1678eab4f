from django import forms
from django.contrib import admin

from .models import PayRatePolicy, WageCalculation
from .services.rate_resolver import RateResolver


class PayRatePolicyAdminForm(forms.ModelForm):
    class Meta:
        model = PayRatePolicy
        fields = '__all__'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['driver_id'].help_text = "Leave empty for the company default policy"


@admin.register(PayRatePolicy)
class PayRatePolicyAdmin(admin.ModelAdmin):
    form = PayRatePolicyAdminForm
    list_display = ('company_id', 'driver_id', 'base_rate', 'night_rate', 'weekend_rate', 'bank_holiday_rate', 'overtime_multiplier', 'is_active', 'updated_at')
    list_filter = ('is_active', 'created_at')
    search_fields = ('company_id', 'driver_id')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        ('Scope', {
            'fields': ('company_id', 'driver_id', 'is_active', ('effective_from', 'effective_to'))
        }),
        ('Rates (per hour)', {
            'fields': (
                ('base_rate', 'night_rate'),
                ('weekend_rate', 'bank_holiday_rate'),
                'overtime_multiplier',
            )
        }),
        ('Thresholds', {
            'fields': (('night_start_hour', 'night_end_hour'), 'daily_overtime_threshold')
        }),
        ('System Information', {
            'fields': (('created_at', 'updated_at'),),
            'classes': ('collapse',)
        })
    )

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        if not RateResolver.check_rate_ordering(obj):
            self.message_user(
                request,
                "Night rate is below weekend rate: weekend night minutes are paid at the night rate.",
                level="warning",
            )


@admin.register(WageCalculation)
class WageCalculationAdmin(admin.ModelAdmin):
    list_display = ('shift_id', 'company_id', 'driver_id', 'regular_minutes', 'night_minutes', 'weekend_minutes', 'bank_holiday_minutes', 'overtime_minutes', 'total_pay', 'calculated_at')
    list_filter = ('calculated_at',)
    search_fields = ('shift_id', 'driver_id')
    readonly_fields = ('calculated_at', 'created_at', 'updated_at')
    date_hierarchy = 'calculated_at'

    fieldsets = (
        ('Shift', {
            'fields': ('shift_id', ('company_id', 'driver_id'), 'pay_rate')
        }),
        ('Minutes Breakdown', {
            'fields': (
                ('regular_minutes', 'night_minutes'),
                ('weekend_minutes', 'bank_holiday_minutes'),
                'overtime_minutes',
            )
        }),
        ('Pay Breakdown', {
            'fields': (
                ('regular_pay', 'night_pay'),
                ('weekend_pay', 'bank_holiday_pay'),
                'overtime_pay',
                'total_pay',
            )
        }),
        ('System Information', {
            'fields': (
                'calculation_details',
                ('calculated_at', 'created_at', 'updated_at')
            ),
            'classes': ('collapse',)
        })
    )
