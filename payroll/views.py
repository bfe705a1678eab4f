"""
Wage calculation endpoints.

Errors raised by the engine (InvalidShiftError, PayRateNotConfiguredError)
are rendered by core.exceptions.custom_exception_handler.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import WageBreakdownSerializer, WageCalculationRequestSerializer
from .services.wage_calculation_service import WageCalculationService

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def calculate_shift_wages(request, shift_id):
    """
    Calculate (or recalculate) the wage breakdown of a shift

    Body:
        company_id (int), driver_id (int), arrival (ISO datetime), departure (ISO datetime)
    """
    params = WageCalculationRequestSerializer(data=request.data)
    params.is_valid(raise_exception=True)

    breakdown = WageCalculationService().calculate(
        shift_id=shift_id,
        company_id=params.validated_data["company_id"],
        driver_id=params.validated_data["driver_id"],
        arrival=params.validated_data["arrival"],
        departure=params.validated_data["departure"],
    )
    return Response(WageBreakdownSerializer(breakdown).data, status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def shift_wage_calculation(request, shift_id):
    """Stored wage breakdown of a shift"""
    breakdown = WageCalculationService().get(shift_id)
    if breakdown is None:
        raise NotFound(f"No wage calculation for shift {shift_id}")
    return Response(WageBreakdownSerializer(breakdown).data)
