"""Telegram channel schemas."""

from expiry_queue.schemas.telegram.send_message_request import SendMessageRequest
from expiry_queue.schemas.telegram.send_result import SendResult

__all__ = ["SendMessageRequest", "SendResult"]
