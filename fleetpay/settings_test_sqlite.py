"""
Django settings for testing with SQLite database
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-fleetpay-wage-engine")
os.environ.setdefault("USE_LOCMEM_CACHE", "True")

# Import base settings
from .settings import *  # noqa

DEBUG = False
SECURE_SSL_REDIRECT = False

# Override database to use SQLite for testing
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Use simpler password hasher for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]


# Disable migrations for faster tests
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "sqlite-test-cache",
    }
}

# Disable external API calls in tests
BANK_HOLIDAYS = {
    **BANK_HOLIDAYS,  # noqa: F405
    "AUTO_SYNC": False,
    "MAX_RETRIES": 1,
}

# Lightweight logging
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}
