"""
Global pytest configuration and fixtures
"""

import pytest

from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before each test to avoid stale data"""
    cache.clear()
    yield
    cache.clear()
