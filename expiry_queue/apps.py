"""Django application configuration for expiry_queue."""

from django.apps import AppConfig


class ExpiryQueueConfig(AppConfig):
    """Configuration class for the expiry queue application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "expiry_queue"
    verbose_name = "Expiry notification queue"
