"""
GOV.UK bank holidays client - communication with the public calendar only

This service is responsible for:
- Making HTTP requests to the bank holidays JSON endpoint
- Validating and filtering the response
- Keeping the last good response in the feed cache
- Retry logic with exponential backoff

It does NOT handle:
- Database operations
- Deciding whether a given date is a holiday
"""

import logging
import time

import requests

from django.conf import settings

from integrations.services.feed_cache import BankHolidayFeedCache
from integrations.utils import safe_to_json

logger = logging.getLogger(__name__)


class BankHolidayFetchError(Exception):
    """The public bank holiday calendar could not be retrieved or parsed."""

    safe_message = "Bank holiday calendar unavailable"


class BankHolidayAPIClient:
    """
    Client for the GOV.UK bank holidays feed.

    The feed is shaped as
    ``{"<region>": {"division": ..., "events": [{"date": "YYYY-MM-DD", "title": ...}]}}``
    and covers several years, so one download serves every year lookup until
    the cache expires.
    """

    RETRY_BACKOFF_BASE = 2  # 2^attempt seconds

    def __init__(self, feed_cache=None, url=None, region=None, timeout=None, max_retries=None):
        conf = settings.BANK_HOLIDAYS
        self.feed_cache = feed_cache or BankHolidayFeedCache(
            ttl=conf["CACHE_TTL"], failure_ttl=conf.get("FAILURE_TTL")
        )
        self.url = url or conf["URL"]
        self.region = region or conf["REGION"]
        self.timeout = timeout or conf["REQUEST_TIMEOUT"]
        self.max_retries = max(1, max_retries or conf["MAX_RETRIES"])

    def fetch_feed(self, use_cache=True):
        """
        Return the whole feed, from cache when fresh.

        With ``use_cache`` a download that failed less than
        ``feed_cache.failure_ttl`` seconds ago is not attempted again.

        Raises:
            BankHolidayFetchError: every attempt failed, the payload is
            malformed, or the feed failed recently
        """
        if use_cache:
            cached = self.feed_cache.get()
            if cached is not None:
                logger.debug("Using cached bank holiday feed")
                return cached
            if self.feed_cache.recently_failed():
                raise BankHolidayFetchError(
                    "Bank holiday feed failed recently, not retrying yet"
                )

        try:
            return self.feed_cache.refresh(self._download)
        except BankHolidayFetchError:
            self.feed_cache.mark_failed()
            raise

    def events_for_year(self, year, region=None, use_cache=True):
        """
        Holidays of one region and year.

        Returns:
            list: [{"date": "YYYY-MM-DD", "title": str}, ...]
        """
        region = region or self.region
        feed = self.fetch_feed(use_cache=use_cache)

        if region not in feed:
            raise BankHolidayFetchError(f"Region '{region}' missing from bank holiday feed")

        events = [
            event
            for event in feed[region].get("events", [])
            if str(event.get("date", "")).startswith(f"{year}-")
        ]
        logger.debug(f"Feed holds {len(events)} {region} holidays for {year}")
        return events

    def _download(self):
        last_exception = None

        for attempt in range(self.max_retries):
            try:
                logger.info(
                    f"Fetching bank holidays from {self.url} "
                    f"(attempt {attempt + 1}/{self.max_retries})"
                )
                response = requests.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                return self._validate(safe_to_json(response))

            except requests.exceptions.HTTPError as e:
                last_exception = e
                status_code = e.response.status_code if e.response is not None else None
                # Don't retry client errors except 429 Too Many Requests
                if status_code is not None and 400 <= status_code < 500 and status_code != 429:
                    logger.error(f"Client error ({status_code}) fetching bank holidays")
                    break
                logger.warning(
                    f"HTTP error on attempt {attempt + 1}/{self.max_retries}: {e}"
                )

            except requests.exceptions.RequestException as e:
                last_exception = e
                logger.warning(
                    f"Network error on attempt {attempt + 1}/{self.max_retries}: {e}"
                )

            except BankHolidayFetchError as e:
                # Malformed payload: retrying will not help
                last_exception = e
                break

            if attempt < self.max_retries - 1:
                backoff_time = self.RETRY_BACKOFF_BASE**attempt
                logger.info(f"Waiting {backoff_time}s before retry...")
                time.sleep(backoff_time)

        raise BankHolidayFetchError(
            f"Failed to fetch bank holidays after {attempt + 1} attempt(s)"
        ) from last_exception

    @staticmethod
    def _validate(payload):
        if not isinstance(payload, dict) or not payload:
            raise BankHolidayFetchError("Bank holiday feed is empty or not an object")

        for region, body in payload.items():
            if not isinstance(body, dict) or not isinstance(body.get("events"), list):
                raise BankHolidayFetchError(
                    f"Bank holiday feed region '{region}' has no events list"
                )
        return payload
