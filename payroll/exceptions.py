from rest_framework import status

from core.exceptions import APIError


class PayRateNotConfiguredError(APIError):
    """No active pay-rate policy applies to the driver or the company."""

    def __init__(self, company_id, driver_id=None):
        super().__init__(
            "No pay rate configured for this driver or company",
            code="PAY_RATE_NOT_CONFIGURED",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"company_id": company_id, "driver_id": driver_id},
        )
        self.company_id = company_id
        self.driver_id = driver_id


class InvalidShiftError(APIError):
    """The shift cannot be priced: missing instants or departure not after arrival."""

    def __init__(self, message, details=None):
        super().__init__(
            message,
            code="INVALID_SHIFT",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )
