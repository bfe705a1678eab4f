"""
Django settings for fleetpay project.
"""

import sys
from pathlib import Path

import dj_database_url  # pip install dj-database-url
from decouple import config  # pip install python-decouple

from .redis_settings import get_cache_config_with_fallback

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY SETTINGS
SECRET_KEY = config("SECRET_KEY")
if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable must be set")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config(
    "ALLOWED_HOSTS",
    default="localhost,127.0.0.1" + (",*" if DEBUG else ""),
).split(",")

# Check if we're running tests
TESTING = "test" in sys.argv

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "rest_framework.authtoken",
    "django_filters",
    "corsheaders",
    # Local apps
    "integrations",
    "payroll",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",  # Must be first
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "fleetpay.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "fleetpay.wsgi.application"

# Database settings
# Priority: DATABASE_URL > individual DB settings > SQLite fallback
DATABASE_URL = config("DATABASE_URL", default="")

if DATABASE_URL:
    DATABASES = {"default": dj_database_url.parse(DATABASE_URL)}
else:
    db_engine = config("DB_ENGINE", default="django.db.backends.sqlite3")

    if db_engine == "django.db.backends.postgresql":
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.postgresql",
                "NAME": config("DB_NAME", default="fleetpay_db"),
                "USER": config("DB_USER", default="fleetpay_user"),
                "PASSWORD": config("DB_PASSWORD", default=""),
                "HOST": config("DB_HOST", default="localhost"),
                "PORT": config("DB_PORT", default="5432"),
                "OPTIONS": {
                    "connect_timeout": 60,
                },
            }
        }
    else:
        # SQLite fallback for development
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": BASE_DIR / "db.sqlite3",
            }
        }

# Cache: Redis when REDIS_URL is configured, local memory otherwise
CACHES = get_cache_config_with_fallback()

# Production security settings
if not DEBUG:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=not TESTING, cast=bool)
    SESSION_COOKIE_SECURE = config("SESSION_COOKIE_SECURE", default=True, cast=bool)
    CSRF_COOKIE_SECURE = config("CSRF_COOKIE_SECURE", default=True, cast=bool)

# CORS settings for the dashboard client
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in config(
        "CORS_ALLOWED_ORIGINS",
        default="http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")
]
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_ALL_ORIGINS = DEBUG

# REST Framework settings
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.TokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
    "COERCE_DECIMAL_TO_STRING": True,
}

# Wage calculation
# Civil timezone used for day boundaries, weekdays and night hours
WAGE_CALCULATION_TIMEZONE = config(
    "WAGE_CALCULATION_TIMEZONE", default="Europe/London"
)

# Public bank holiday calendar (GOV.UK format)
BANK_HOLIDAYS = {
    "URL": config("BANK_HOLIDAYS_URL", default="https://www.gov.uk/bank-holidays.json"),
    "REGION": config("BANK_HOLIDAYS_REGION", default="england-and-wales"),
    "CACHE_TTL": config("BANK_HOLIDAYS_CACHE_TTL", default=60 * 60 * 24, cast=int),
    "REQUEST_TIMEOUT": config("BANK_HOLIDAYS_REQUEST_TIMEOUT", default=10, cast=int),
    "MAX_RETRIES": config("BANK_HOLIDAYS_MAX_RETRIES", default=3, cast=int),
    # Seconds to stop calling the feed after a failed download
    "FAILURE_TTL": config("BANK_HOLIDAYS_FAILURE_TTL", default=60 * 5, cast=int),
    "AUTO_SYNC": config("BANK_HOLIDAYS_AUTO_SYNC", default=True, cast=bool),
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {
            "min_length": 8,
        },
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# Internationalization
LANGUAGE_CODE = "en-gb"
TIME_ZONE = "Europe/London"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOG_DIR = Path(config("LOG_DIR", default=str(BASE_DIR / "logs")))
LOG_DIR.mkdir(exist_ok=True)

# Logging configuration with rotation
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,

    "filters": {
        "pii_redactor": {"()": "fleetpay.logging_filters.PIIRedactorFilter"},
    },

    "formatters": {
        "verbose": {"format": "{levelname} {asctime} {name} {process:d} {thread:d} {message}", "style": "{"},
        "simple":  {"format": "{levelname} {asctime} {name} {message}", "style": "{"},
        "minimal": {"format": "{levelname} {message}", "style": "{"},
    },

    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "minimal",
            "level": "DEBUG" if DEBUG else "INFO",
            "filters": ["pii_redactor"],
        },
        "app_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOG_DIR / "fleetpay.log",
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "formatter": "simple",
            "level": "INFO",
            "encoding": "utf-8",
            "filters": ["pii_redactor"],
        },
        "wages_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOG_DIR / "wages.log",
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "verbose",
            "level": "INFO",
            "encoding": "utf-8",
            "filters": ["pii_redactor"],
        },
    },

    "loggers": {
        "django":       {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "core":         {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "integrations": {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "payroll":      {"handlers": ["wages_file"] + (["console"] if DEBUG else []), "level": "INFO", "propagate": False},

        "gunicorn.error":  {"handlers": ["console"], "level": "INFO", "propagate": False},
        "gunicorn.access": {"handlers": ["console"], "level": "INFO", "propagate": False},

        # root
        "": {"handlers": ["console"], "level": "WARNING"},
    },
}
