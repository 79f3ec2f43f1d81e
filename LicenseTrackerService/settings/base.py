"""
Base Django settings for LicenseTrackerService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from celery.schedules import crontab

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-7c%u0r!x3m9t$k1w@q8z+e2v^b6n(h4j)y5p&s0d*f-g#a_l"
)

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
    "drf_spectacular",
    # Local apps
    "LicenseTrackerService.apps.LicenseTrackerServiceConfig",
    "core",
    "licenses",
    "presence",
    "access_logs",
    "accounts.apps.AccountsConfig",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.metrics.MetricsMiddleware",
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.auth.AdminAuthorizationMiddleware",
]

ROOT_URLCONF = "LicenseTrackerService.urls"

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

WSGI_APPLICATION = "LicenseTrackerService.wsgi.application"
ASGI_APPLICATION = "LicenseTrackerService.asgi.application"

# Database
# Every store call is bounded: connect_timeout on connect,
# statement_timeout (ms) on the server side.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "license_tracker"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
            "options": f"-c statement_timeout={os.environ.get('DB_STATEMENT_TIMEOUT_MS', '5000')}",
        },
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Tracker Service API",
    "DESCRIPTION": (
        "Issues, verifies and tracks license keys. "
        "Client endpoints serve running installations; admin endpoints "
        "require admin or creator credentials in the request body."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "Client API", "description": "Verification, heartbeats and statistics"},
        {"name": "Admin API", "description": "Key and account administration"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# License tracking
HEARTBEAT_ONLINE_WINDOW_SECONDS = int(os.environ.get("HEARTBEAT_ONLINE_WINDOW_SECONDS", "60"))

# Access log: "database" (pruned periodically) or "memory" (bounded per process)
ACCESS_LOG_BACKEND = os.environ.get("ACCESS_LOG_BACKEND", "database")
ACCESS_LOG_MAX_EVENTS = int(os.environ.get("ACCESS_LOG_MAX_EVENTS", "1000"))
ACCESS_LOG_RECENT_LIMIT = int(os.environ.get("ACCESS_LOG_RECENT_LIMIT", "100"))

# Accounts
CREATOR_USERNAME = os.environ.get("CREATOR_USERNAME", "creator")
CREATOR_PASSWORD = os.environ.get("CREATOR_PASSWORD")
# Deprecated static admin secret; unset disables it
LEGACY_ADMIN_PASSWORD = os.environ.get("LEGACY_ADMIN_PASSWORD") or None

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://127.0.0.1:6379/0")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULE = {
    "prune-access-log": {
        "task": "core.tasks.prune_access_log_task",
        "schedule": crontab(minute=0),
    },
}

# Observability
OBSERVABILITY_ENABLED = os.environ.get("OBSERVABILITY_ENABLED", "true").lower() == "true"
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
