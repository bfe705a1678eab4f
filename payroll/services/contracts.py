"""
Data contracts for wage calculations.

Defines the breakdown returned to callers of the wage engine, so that views,
reports and tests all see the same keys and types.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, TypedDict

MINUTE_FIELDS = (
    "regular_minutes",
    "night_minutes",
    "weekend_minutes",
    "bank_holiday_minutes",
)

PAY_FIELDS = (
    "regular_pay",
    "night_pay",
    "weekend_pay",
    "bank_holiday_pay",
    "overtime_pay",
    "total_pay",
)


class WageBreakdown(TypedDict):
    """
    Wage breakdown of one shift.

    The four category minute counts partition the shift; overtime_minutes is
    an overlay on top of them and is paid in addition to its category.
    """
    # Identity (required)
    shift_id: int
    company_id: int
    driver_id: int
    pay_rate_id: Optional[int]

    # Minutes (required)
    regular_minutes: int
    night_minutes: int
    weekend_minutes: int
    bank_holiday_minutes: int
    overtime_minutes: int
    total_minutes: int

    # Amounts, 2 dp (required)
    regular_pay: Decimal
    night_pay: Decimal
    weekend_pay: Decimal
    bank_holiday_pay: Decimal
    overtime_pay: Decimal
    total_pay: Decimal

    calculated_at: datetime


class ContractValidationError(Exception):
    """Raised when a breakdown doesn't conform to the contract"""
    pass


def breakdown_from_calculation(calculation) -> WageBreakdown:
    """Build a WageBreakdown from a stored WageCalculation row."""
    result = {
        "shift_id": calculation.shift_id,
        "company_id": calculation.company_id,
        "driver_id": calculation.driver_id,
        "pay_rate_id": calculation.pay_rate_id,
        "overtime_minutes": calculation.overtime_minutes,
        "total_minutes": calculation.total_minutes,
        "calculated_at": calculation.calculated_at,
    }
    for field in MINUTE_FIELDS + PAY_FIELDS:
        result[field] = getattr(calculation, field)
    return result  # type: ignore


def validate_wage_breakdown(result: dict) -> WageBreakdown:
    """
    Check that a breakdown has every field and that its minutes partition
    the shift.

    Raises:
        ContractValidationError: missing fields, negative minutes or a broken partition
    """
    required_fields = MINUTE_FIELDS + PAY_FIELDS + ("overtime_minutes", "total_minutes")
    missing_fields = [field for field in required_fields if field not in result]
    if missing_fields:
        raise ContractValidationError(f"Missing required fields: {missing_fields}")

    for field in MINUTE_FIELDS + ("overtime_minutes",):
        if result[field] < 0:
            raise ContractValidationError(f"{field} cannot be negative: {result[field]}")

    partition = sum(result[field] for field in MINUTE_FIELDS)
    if partition != result["total_minutes"]:
        raise ContractValidationError(
            f"Category minutes sum to {partition}, expected {result['total_minutes']}"
        )

    for field in PAY_FIELDS:
        if not isinstance(result[field], Decimal):
            raise ContractValidationError(f"{field} must be a Decimal")

    return result  # type: ignore
