"""Downstream service clients package."""

from expiry_queue.services.downstream.base_downstream_client import (
    BaseDownstreamClient,
)
from expiry_queue.services.downstream.telegram_client import TelegramClient

__all__ = [
    "BaseDownstreamClient",
    "TelegramClient",
]
