import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import BankHoliday
from .serializers import BankHolidaySerializer, BankHolidaySyncRequestSerializer
from .services.holiday_sync_service import BankHolidaySyncService

logger = logging.getLogger(__name__)


class BankHolidayViewSet(viewsets.ModelViewSet):
    """API for managing company bank holidays"""

    queryset = BankHoliday.objects.all().order_by("-date")
    serializer_class = BankHolidaySerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["company_id", "is_recurring", "source"]

    @action(detail=False, methods=["post"])
    def sync(self, request):
        """
        Imports one year of public bank holidays for a company

        Body:
            company_id (int): Company to import for
            year (int): Year for synchronization (defaults to the current year)
        """
        params = BankHolidaySyncRequestSerializer(data=request.data)
        params.is_valid(raise_exception=True)
        company_id = params.validated_data["company_id"]
        year = params.validated_data["year"]

        created = BankHolidaySyncService().sync_year(company_id, year)
        logger.info(
            "Bank holiday sync requested via API",
            extra={"company_id": company_id, "year": year, "created": created},
        )

        return Response(
            {
                "message": f"Synced bank holidays for year {year}",
                "company_id": company_id,
                "year": year,
                "created": created,
            },
            status=status.HTTP_200_OK,
        )
