"""
Django settings for testing with SQLite database
"""

import os

os.environ.setdefault("SECRET_KEY", "test-only-secret-key-shiftledger-not-for-production-use")
os.environ.setdefault("DEBUG", "False")

# Import base settings
from .settings import *  # noqa

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

# Run tasks inline; no broker during tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Quiet logging: console only, warnings and up
LOGGING["handlers"] = {
    "console": {
        "class": "logging.StreamHandler",
        "formatter": "minimal",
        "level": "WARNING",
        "filters": ["pii_redactor"],
    },
}
for _logger in LOGGING["loggers"].values():
    _logger["handlers"] = ["console"]
