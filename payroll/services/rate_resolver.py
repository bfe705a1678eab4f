"""
Pay-rate policy resolution for a driver
"""

import logging
import warnings

from django.db import transaction

from core.logging_utils import hash_driver_id
from payroll.exceptions import PayRateNotConfiguredError
from payroll.models import PayRatePolicy
from payroll.warnings import PayRateOrderingWarning

logger = logging.getLogger(__name__)


class RateResolver:
    """
    Picks the active policy for a driver, falling back to the company default.
    """

    def resolve(self, company_id, driver_id):
        """
        Args:
            company_id (int): Company of the shift
            driver_id (int): Driver of the shift

        Returns:
            PayRatePolicy: driver-specific policy if active, else the company default

        Raises:
            PayRateNotConfiguredError: neither policy exists
        """
        active = PayRatePolicy.objects.filter(company_id=company_id, is_active=True)

        policy = None
        if driver_id is not None:
            policy = active.filter(driver_id=driver_id).first()
        if policy is None:
            policy = active.filter(driver_id__isnull=True).first()

        if policy is None:
            logger.error(
                "No pay rate configured",
                extra={"company_id": company_id, "driver_hash": hash_driver_id(driver_id)},
            )
            raise PayRateNotConfiguredError(company_id, driver_id)

        self.check_rate_ordering(policy)
        return policy

    @staticmethod
    def check_rate_ordering(policy):
        """
        Warn when the night rate is below the weekend rate.

        Returns:
            bool: True when the ordering is consistent
        """
        if policy.night_rate >= policy.weekend_rate:
            return True

        message = (
            f"Pay rate policy {policy.pk}: night rate {policy.night_rate} is below "
            f"weekend rate {policy.weekend_rate}; weekend night minutes are paid "
            f"at the night rate"
        )
        logger.warning(message, extra={"company_id": policy.company_id})
        warnings.warn(message, PayRateOrderingWarning, stacklevel=3)
        return False


def initialize_default_pay_rates(company_id):
    """
    Return the company default policy, creating it with the standard rates
    when the company has none.

    Returns:
        tuple: (PayRatePolicy, created)
    """
    with transaction.atomic():
        existing = PayRatePolicy.objects.filter(
            company_id=company_id, driver_id__isnull=True, is_active=True
        ).first()
        if existing is not None:
            return existing, False

        policy = PayRatePolicy.objects.create(company_id=company_id, driver_id=None)
        logger.info(
            "Created default pay rates", extra={"company_id": company_id}
        )
        return policy, True
