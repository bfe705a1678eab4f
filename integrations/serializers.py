from rest_framework import serializers

from django.utils import timezone

from .models import BankHoliday


class BankHolidaySerializer(serializers.ModelSerializer):
    class Meta:
        model = BankHoliday
        fields = [
            "id",
            "company_id",
            "name",
            "date",
            "is_recurring",
            "source",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank")
        return value


class BankHolidaySyncRequestSerializer(serializers.Serializer):
    """Body of the sync action: which company and year to import."""

    company_id = serializers.IntegerField(min_value=1)
    year = serializers.IntegerField(min_value=1900, max_value=2200, required=False)

    def validate(self, attrs):
        attrs.setdefault("year", timezone.localdate().year)
        return attrs
