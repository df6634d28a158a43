"""Typed access to the queue and channel settings.

Settings are read from ``django.conf.settings`` on every call so that
``override_settings`` in tests and per-invocation environment changes are
always honoured.
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from pydantic import BaseModel, Field, ValidationError

from expiry_queue.constants import (
    DEFAULT_CHANNEL_RATE_LIMIT_REQUESTS,
    DEFAULT_CHANNEL_RATE_LIMIT_WINDOW,
    DEFAULT_DOWNSTREAM_TIMEOUT_SECONDS,
    DEFAULT_PROCESSOR_RATE_LIMIT_REQUESTS,
    DEFAULT_QUEUE_SETTINGS,
)


class QueueSettings(BaseModel):
    """Tunables for the populate/process/cleanup jobs."""

    days_ahead: int = Field(..., ge=0)
    populate_batch_size: int = Field(..., ge=1)
    process_batch_size: int = Field(..., ge=1)
    max_items_per_run: int = Field(..., ge=1)
    send_delay_ms: int = Field(..., ge=0)
    staging_retention_days: int = Field(..., ge=1)
    retention_days: int = Field(..., ge=1)
    processed_retention_days: int = Field(..., ge=1)


class ChannelSettings(BaseModel):
    """Connection details for the Telegram outbound channel."""

    bot_token: str = Field(..., min_length=1)
    api_base_url: str = Field(..., min_length=1)
    parse_mode: str | None = None
    timeout_seconds: int = Field(..., ge=1)
    rate_limit_requests: int = Field(..., ge=1)
    rate_limit_window: int = Field(..., ge=1)
    processor_rate_limit_requests: int = Field(..., ge=1)


def get_queue_settings() -> QueueSettings:
    """Merge ``settings.EXPIRY_QUEUE`` over the defaults and validate.

    Raises:
        ImproperlyConfigured: If any value is missing or out of range.
    """
    merged = {**DEFAULT_QUEUE_SETTINGS, **getattr(settings, "EXPIRY_QUEUE", {})}
    try:
        return QueueSettings(**{key.lower(): value for key, value in merged.items()})
    except ValidationError as e:
        raise ImproperlyConfigured(f"Invalid EXPIRY_QUEUE settings: {e}") from e


def get_channel_settings() -> ChannelSettings:
    """Return the outbound channel configuration.

    Raises:
        ImproperlyConfigured: If the bot token or API URL is missing.
    """
    try:
        return ChannelSettings(
            bot_token=getattr(settings, "TELEGRAM_BOT_TOKEN", ""),
            api_base_url=getattr(settings, "TELEGRAM_API_BASE_URL", ""),
            parse_mode=getattr(settings, "TELEGRAM_PARSE_MODE", None),
            timeout_seconds=getattr(
                settings,
                "DOWNSTREAM_TIMEOUT_SECONDS",
                DEFAULT_DOWNSTREAM_TIMEOUT_SECONDS,
            ),
            rate_limit_requests=getattr(
                settings,
                "CHANNEL_RATE_LIMIT_REQUESTS",
                DEFAULT_CHANNEL_RATE_LIMIT_REQUESTS,
            ),
            rate_limit_window=getattr(
                settings,
                "CHANNEL_RATE_LIMIT_WINDOW",
                DEFAULT_CHANNEL_RATE_LIMIT_WINDOW,
            ),
            processor_rate_limit_requests=getattr(
                settings,
                "PROCESSOR_RATE_LIMIT_REQUESTS",
                DEFAULT_PROCESSOR_RATE_LIMIT_REQUESTS,
            ),
        )
    except ValidationError as e:
        raise ImproperlyConfigured(
            "Telegram channel is not configured (TELEGRAM_BOT_TOKEN and "
            "TELEGRAM_API_BASE_URL are required)"
        ) from e
