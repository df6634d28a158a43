"""Authentication classes for the expiry_queue API."""

from expiry_queue.auth.service_token import (
    ServicePrincipal,
    ServiceTokenAuthentication,
    TelegramSecretAuthentication,
)

__all__ = [
    "ServicePrincipal",
    "ServiceTokenAuthentication",
    "TelegramSecretAuthentication",
]
