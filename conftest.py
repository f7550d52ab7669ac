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


@pytest.fixture
def overtime_defaults(settings):
    """Pin the SHIFTLEDGER overtime defaults to 40h / +50%"""
    settings.SHIFTLEDGER = {
        **settings.SHIFTLEDGER,
        "DEFAULT_OVERTIME_THRESHOLD_HOURS": 40,
        "DEFAULT_OVERTIME_PERCENT": 50,
    }
    return settings
