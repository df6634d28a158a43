"""Django settings for the expiry notifier service.

All deployment-specific values are read from environment variables so the
same settings module serves local development, containers and the scheduled
job runners.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-expiry-notifier-dev-key")

DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

# Reverse proxies in front of the service that append to X-Forwarded-For
TRUSTED_PROXY_COUNT = int(os.getenv("TRUSTED_PROXY_COUNT", "0"))

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "expiry_queue",
]

MIDDLEWARE = [
    "expiry_queue.middleware.RequestIDMiddleware",
    "expiry_queue.middleware.ProcessTimeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "expiry_notifier.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "expiry_notifier.wsgi.application"

# Every statement is bounded so a stuck query cannot stall a job run
DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", "10"))

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "postgres"),
        "USER": os.getenv("DB_USER", "postgres"),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", "localhost"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "CONN_MAX_AGE": 60,
        "OPTIONS": {
            "connect_timeout": DB_TIMEOUT_SECONDS,
            "options": f"-c statement_timeout={DB_TIMEOUT_SECONDS * 1000}",
        },
    }
}

REDIS_URL = os.getenv("REDIS_URL", "")

if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "socket_connect_timeout": 5,
                "socket_timeout": 5,
            },
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = "en-us"

# Expiry offsets are computed against this zone's calendar date
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")

USE_I18N = True

USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "expiry_queue.auth.ServiceTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "expiry_queue.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# Bearer token the scheduler presents when triggering queue jobs
QUEUE_SERVICE_TOKEN = os.getenv("QUEUE_SERVICE_TOKEN", "")

# Telegram outbound channel
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_API_BASE_URL = os.getenv("TELEGRAM_API_BASE_URL", "https://api.telegram.org")
TELEGRAM_SEND_SECRET = os.getenv("TELEGRAM_SEND_SECRET", "")
TELEGRAM_PARSE_MODE = os.getenv("TELEGRAM_PARSE_MODE") or None

DOWNSTREAM_TIMEOUT_SECONDS = int(os.getenv("DOWNSTREAM_TIMEOUT_SECONDS", "10"))

# Per-caller budget enforced in front of the Telegram Bot API
CHANNEL_RATE_LIMIT_REQUESTS = int(os.getenv("CHANNEL_RATE_LIMIT_REQUESTS", "30"))
CHANNEL_RATE_LIMIT_WINDOW = int(os.getenv("CHANNEL_RATE_LIMIT_WINDOW", "60"))
PROCESSOR_RATE_LIMIT_REQUESTS = int(
    os.getenv("PROCESSOR_RATE_LIMIT_REQUESTS", "600")
)

EXPIRY_QUEUE = {
    "DAYS_AHEAD": int(os.getenv("QUEUE_DAYS_AHEAD", "7")),
    "POPULATE_BATCH_SIZE": int(os.getenv("QUEUE_POPULATE_BATCH_SIZE", "100")),
    "PROCESS_BATCH_SIZE": int(os.getenv("QUEUE_PROCESS_BATCH_SIZE", "50")),
    "MAX_ITEMS_PER_RUN": int(os.getenv("QUEUE_MAX_ITEMS_PER_RUN", "1000")),
    "SEND_DELAY_MS": int(os.getenv("QUEUE_SEND_DELAY_MS", "100")),
    "STAGING_RETENTION_DAYS": int(os.getenv("QUEUE_STAGING_RETENTION_DAYS", "7")),
    "RETENTION_DAYS": int(os.getenv("QUEUE_RETENTION_DAYS", "30")),
    "PROCESSED_RETENTION_DAYS": int(
        os.getenv("QUEUE_PROCESSED_RETENTION_DAYS", "7")
    ),
}

SERVICE_NAME = os.getenv("SERVICE_NAME", "expiry-notifier")
