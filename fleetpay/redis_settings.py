"""
Cache configuration

The bank holiday feed cache lives in the default cache alias, so every worker
process sees the same fetched calendar when Redis is configured.
"""

from urllib.parse import urlparse

from decouple import config


def get_redis_cache_config(redis_url):
    """
    Build a django-redis configuration for a single Redis instance.

    Args:
        redis_url (str): redis://[:password@]host:port/db

    Returns:
        dict: CACHES setting
    """
    parsed = urlparse(redis_url)
    host = parsed.hostname or "localhost"
    port = parsed.port or 6379
    db = int(parsed.path.lstrip("/")) if parsed.path.lstrip("/") else 0

    cache_config = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": f"redis://{host}:{port}/{db}",
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "CONNECTION_POOL_KWARGS": {
                    "max_connections": 20,
                    "retry_on_timeout": True,
                    "socket_connect_timeout": 5,
                    "socket_timeout": 5,
                },
                # Redis errors behave as cache misses
                "IGNORE_EXCEPTIONS": True,
            },
            "TIMEOUT": 300,
            "KEY_PREFIX": "fleetpay",
        }
    }

    if parsed.password:
        cache_config["default"]["OPTIONS"]["CONNECTION_POOL_KWARGS"][
            "password"
        ] = parsed.password

    return cache_config


def get_cache_config_with_fallback():
    """
    Use Redis when REDIS_URL is set, otherwise an in-process LocMem cache.
    """
    redis_url = config("REDIS_URL", default="")
    use_locmem = config("USE_LOCMEM_CACHE", default=False, cast=bool)

    if not redis_url or use_locmem:
        return {
            "default": {
                "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                "LOCATION": "fleetpay-cache",
                "TIMEOUT": 300,
                "OPTIONS": {
                    "MAX_ENTRIES": 10000,
                },
            }
        }

    return get_redis_cache_config(redis_url)
