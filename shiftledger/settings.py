"""
Django settings for shiftledger project.
"""

import os
import sys
from pathlib import Path

import dj_database_url  # pip install dj-database-url
from decouple import Csv, config  # pip install python-decouple

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
    cast=Csv(),
)

# Check if we're running tests
TESTING = "test" in sys.argv or "pytest" in sys.modules

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
    # Local apps
    "core",
    "users",
    "worktime",
    "payroll",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "shiftledger.urls"

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

WSGI_APPLICATION = "shiftledger.wsgi.application"

# Database settings
# Priority: DATABASE_URL > SQLite fallback
DATABASE_URL = config("DATABASE_URL", default="")

if DATABASE_URL:
    DATABASES = {"default": dj_database_url.parse(DATABASE_URL, conn_max_age=600)}
else:
    # SQLite fallback for development
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# Production security settings
if not DEBUG:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SESSION_COOKIE_SECURE = config("SESSION_COOKIE_SECURE", default=True, cast=bool)
    CSRF_COOKIE_SECURE = config("CSRF_COOKIE_SECURE", default=True, cast=bool)
    X_FRAME_OPTIONS = "DENY"

# REST Framework settings
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.TokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 50,
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

# Scheduling and payroll policy
# OvertimeSettings rows override the overtime defaults at runtime
SHIFTLEDGER = {
    "MAX_SHIFT_HOURS": config("MAX_SHIFT_HOURS", default=16, cast=int),
    "DAILY_LIMIT_MINUTES": config("DAILY_LIMIT_MINUTES", default=960, cast=int),
    "DEFAULT_OVERTIME_THRESHOLD_HOURS": config(
        "DEFAULT_OVERTIME_THRESHOLD_HOURS", default=40, cast=int
    ),
    "DEFAULT_OVERTIME_PERCENT": config("DEFAULT_OVERTIME_PERCENT", default=50, cast=int),
    "MINIMUM_HOURLY_WAGE": config("MINIMUM_HOURLY_WAGE", default="15.75"),
}

# Celery
CELERY_BROKER_URL = config("CELERY_BROKER_URL", default="redis://localhost:6379/0")
CELERY_RESULT_BACKEND = config(
    "CELERY_RESULT_BACKEND", default="redis://localhost:6379/1"
)
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TASK_DEFAULT_RETRY_DELAY = 30
CELERY_TASK_DEFAULT_MAX_RETRIES = 3
CELERY_WORKER_MAX_TASKS_PER_CHILD = 200
CELERY_TASK_ALWAYS_EAGER = config("CELERY_TASK_ALWAYS_EAGER", default=False, cast=bool)

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
LANGUAGE_CODE = "en-us"
# Wall-clock shift times are interpreted in this zone
TIME_ZONE = config("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

CELERY_TIMEZONE = TIME_ZONE

# Static files
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOG_DIR = Path(config("LOG_DIR", default=str(BASE_DIR / "logs")))
if not TESTING:
    LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,

    "filters": {
        "pii_redactor": {"()": "shiftledger.logging_filters.PIIRedactorFilter"},
    },

    "formatters": {
        "verbose": {"format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}", "style": "{"},
        "simple":  {"format": "{levelname} {asctime} {message}", "style": "{"},
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
            "filename": LOG_DIR / "shiftledger.log",
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "formatter": "simple",
            "level": "INFO",
            "encoding": "utf-8",
            "filters": ["pii_redactor"],
            "delay": True,
        },
    },

    "loggers": {
        "django":   {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "core":     {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "users":    {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "worktime": {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "payroll":  {"handlers": ["app_file"] if not DEBUG else ["console"], "level": "INFO", "propagate": False},
        "celery":   {"handlers": ["console"], "level": "INFO", "propagate": False},

        # root
        "": {"handlers": ["console"], "level": "WARNING"},
    },
}
