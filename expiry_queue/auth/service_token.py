"""Shared-secret authentication for job triggers and the send relay.

The endpoints are called by a scheduler or by sibling services, never by end
users, so a caller is identified by the secret it presents:

1. ``Authorization: Bearer <QUEUE_SERVICE_TOKEN>`` for every endpoint
2. ``X-Telegram-Secret: <TELEGRAM_SEND_SECRET>`` for the send relay only
"""

import hmac

from django.conf import settings

import structlog
from rest_framework import authentication, exceptions

from expiry_queue.constants import TELEGRAM_SECRET_HEADER

logger = structlog.get_logger(__name__)


class ServicePrincipal:
    """Authenticated caller of the service.

    This is not a Django User model, just a container for the caller name.
    """

    def __init__(self, name: str):
        self.id = name
        self.name = name
        self.is_authenticated = True

    def __str__(self):
        """String representation."""
        return f"ServicePrincipal(name={self.name})"


def _secrets_match(presented: str, expected: str) -> bool:
    return bool(expected) and hmac.compare_digest(
        presented.encode(), expected.encode()
    )


class ServiceTokenAuthentication(authentication.BaseAuthentication):
    """Bearer token authentication against QUEUE_SERVICE_TOKEN."""

    keyword = "Bearer"

    def authenticate(self, request):
        """Authenticate the request using the service bearer token.

        Returns:
            Tuple of (principal, token) or None if no Authorization header

        Raises:
            AuthenticationFailed: If the header is malformed or the token wrong
        """
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != self.keyword.lower():
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]
        if not _secrets_match(token, getattr(settings, "QUEUE_SERVICE_TOKEN", "")):
            logger.warning("service_token_rejected", path=request.path)
            raise exceptions.AuthenticationFailed("Invalid service token")

        return (ServicePrincipal("service"), token)

    def authenticate_header(self, request):
        """Advertise the scheme so failures answer 401 rather than 403."""
        return self.keyword


class TelegramSecretAuthentication(authentication.BaseAuthentication):
    """Shared-secret header authentication for the send relay."""

    def authenticate(self, request):
        """Authenticate the request using the X-Telegram-Secret header.

        Returns:
            Tuple of (principal, secret) or None if the header is absent

        Raises:
            AuthenticationFailed: If the secret does not match
        """
        secret = request.headers.get(TELEGRAM_SECRET_HEADER)
        if not secret:
            return None

        if not _secrets_match(secret, getattr(settings, "TELEGRAM_SEND_SECRET", "")):
            logger.warning("telegram_secret_rejected", path=request.path)
            raise exceptions.AuthenticationFailed("Invalid Telegram secret")

        return (ServicePrincipal("telegram_secret"), secret)

    def authenticate_header(self, request):
        return TELEGRAM_SECRET_HEADER
