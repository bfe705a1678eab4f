"""
Bank holiday feed cache

Holds the most recent successful download of the public bank holiday
calendar. The cache is an ordinary object so callers and tests can inject
their own backend, key or TTL; the payload itself lives in a Django cache
alias and is therefore shared by every process using that backend.

Two small markers live next to the feed:
- a failure marker, set when a download fails, so that callers stop hitting
  an unavailable feed for ``failure_ttl`` seconds;
- an import marker per (company, year), holding the ``fetched_at`` of the
  feed last imported for it. A new download changes ``fetched_at`` and so
  invalidates every import marker.
"""

import logging
import time

from django.core.cache import caches

logger = logging.getLogger(__name__)


class BankHolidayFeedCache:
    """
    TTL cache for the raw bank holiday feed.

    Entries are stored as ``{"data": ..., "fetched_at": epoch_seconds}``. An
    entry older than ``ttl`` is treated as missing even if the backend still
    holds it.
    """

    DEFAULT_TTL = 60 * 60 * 24  # 24 hours
    DEFAULT_FAILURE_TTL = 60 * 5
    DEFAULT_KEY = "bank_holiday_feed"

    def __init__(self, ttl=None, backend=None, key=None, clock=time.time, failure_ttl=None):
        self.ttl = int(ttl if ttl is not None else self.DEFAULT_TTL)
        self.failure_ttl = int(
            failure_ttl if failure_ttl is not None else self.DEFAULT_FAILURE_TTL
        )
        self.backend = backend if backend is not None else caches["default"]
        self.key = key or self.DEFAULT_KEY
        self._clock = clock

    @property
    def failure_key(self):
        return f"{self.key}:failed_at"

    def _import_key(self, company_id, year):
        return f"{self.key}:imported:{company_id}:{year}"

    def _entry(self):
        entry = self.backend.get(self.key)
        if not isinstance(entry, dict) or "fetched_at" not in entry:
            return None
        return entry

    def is_fresh(self):
        entry = self._entry()
        if entry is None:
            return False
        return (self._clock() - entry["fetched_at"]) < self.ttl

    def get(self):
        """Return the cached feed, or None when absent or expired."""
        if not self.is_fresh():
            return None
        return self._entry()["data"]

    def fetched_at(self):
        entry = self._entry()
        return entry["fetched_at"] if entry else None

    def store(self, data):
        self.backend.set(
            self.key, {"data": data, "fetched_at": self._clock()}, self.ttl
        )
        self.backend.delete(self.failure_key)
        logger.debug(f"Stored bank holiday feed under '{self.key}' (ttl={self.ttl}s)")
        return data

    def refresh(self, loader):
        """
        Load a new feed with ``loader()`` and store it.

        Exceptions raised by the loader propagate and leave the previous
        entry untouched.
        """
        return self.store(loader())

    def mark_failed(self):
        self.backend.set(self.failure_key, self._clock(), self.failure_ttl)
        logger.info(
            f"Bank holiday feed marked unavailable for {self.failure_ttl}s"
        )

    def recently_failed(self):
        failed_at = self.backend.get(self.failure_key)
        if failed_at is None:
            return False
        return (self._clock() - failed_at) < self.failure_ttl

    def mark_imported(self, company_id, year):
        """Record that the current feed has been imported for a company and year."""
        fetched_at = self.fetched_at()
        if fetched_at is not None:
            self.backend.set(self._import_key(company_id, year), fetched_at, self.ttl)

    def is_imported(self, company_id, year):
        """Whether the current, fresh feed was already imported for a company and year."""
        if not self.is_fresh():
            return False
        return self.backend.get(self._import_key(company_id, year)) == self.fetched_at()

    def clear(self):
        self.backend.delete_many([self.key, self.failure_key])
