from rest_framework import serializers


class WageCalculationRequestSerializer(serializers.Serializer):
    """Shift to price, as captured by the time-tracking collaborator"""

    company_id = serializers.IntegerField(min_value=1)
    driver_id = serializers.IntegerField(min_value=1)
    arrival = serializers.DateTimeField()
    departure = serializers.DateTimeField()


class WageBreakdownSerializer(serializers.Serializer):
    """Read-only rendering of a WageBreakdown"""

    shift_id = serializers.IntegerField()
    company_id = serializers.IntegerField()
    driver_id = serializers.IntegerField()
    pay_rate_id = serializers.IntegerField(allow_null=True)

    regular_minutes = serializers.IntegerField()
    night_minutes = serializers.IntegerField()
    weekend_minutes = serializers.IntegerField()
    bank_holiday_minutes = serializers.IntegerField()
    overtime_minutes = serializers.IntegerField()
    total_minutes = serializers.IntegerField()

    regular_pay = serializers.DecimalField(max_digits=10, decimal_places=2)
    night_pay = serializers.DecimalField(max_digits=10, decimal_places=2)
    weekend_pay = serializers.DecimalField(max_digits=10, decimal_places=2)
    bank_holiday_pay = serializers.DecimalField(max_digits=10, decimal_places=2)
    overtime_pay = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_pay = serializers.DecimalField(max_digits=10, decimal_places=2)

    calculated_at = serializers.DateTimeField()
