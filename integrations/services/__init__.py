from .bank_holiday_oracle import BankHolidayOracle
from .feed_cache import BankHolidayFeedCache
from .gov_uk_api_client import BankHolidayAPIClient, BankHolidayFetchError
from .holiday_sync_service import BankHolidaySyncService

__all__ = [
    "BankHolidayAPIClient",
    "BankHolidayFeedCache",
    "BankHolidayFetchError",
    "BankHolidayOracle",
    "BankHolidaySyncService",
]
