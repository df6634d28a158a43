"""Outbound Telegram channel with a per-caller request budget."""

from typing import Any

import requests
import structlog

from expiry_queue.config import ChannelSettings, get_channel_settings
from expiry_queue.constants import QUEUE_PROCESSOR_CALLER
from expiry_queue.exceptions import ChannelRateLimitError, DownstreamServiceError
from expiry_queue.schemas.telegram import SendResult
from expiry_queue.services.downstream import TelegramClient
from expiry_queue.services.rate_limiter import TokenBucketRateLimiter

logger = structlog.get_logger(__name__)


class TelegramChannel:
    """Delivers text messages to Telegram chats.

    ``send_message`` never raises for delivery problems. Budget rejections,
    Bot API errors and transport failures all come back as a failed
    ``SendResult`` so callers can record them per message.

    Constructing a channel reads the channel settings and raises
    ``ImproperlyConfigured`` when the bot token is missing.
    """

    def __init__(
        self,
        channel_settings: ChannelSettings | None = None,
        client: TelegramClient | None = None,
        rate_limiter: TokenBucketRateLimiter | None = None,
    ) -> None:
        config = channel_settings or get_channel_settings()
        self.default_parse_mode = config.parse_mode
        self.client = client or TelegramClient(
            bot_token=config.bot_token,
            api_base_url=config.api_base_url,
            timeout=config.timeout_seconds,
        )
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(
            max_requests=config.rate_limit_requests,
            window=config.rate_limit_window,
            caller_limits={
                QUEUE_PROCESSOR_CALLER: config.processor_rate_limit_requests
            },
        )

    def send_message(
        self,
        chat_id: int | str,
        text: str,
        parse_mode: str | None = None,
        caller: str = QUEUE_PROCESSOR_CALLER,
        **options: Any,
    ) -> SendResult:
        """Send one message, charging it to ``caller``'s budget.

        Args:
            chat_id: Destination chat
            text: Message text
            parse_mode: Bot API parse mode; falls back to TELEGRAM_PARSE_MODE
            caller: Identity the rate limit is tracked against
            **options: Extra sendMessage parameters (disable_notification, ...)

        Returns:
            SendResult carrying the Telegram message ID or the error.
        """
        allowed, retry_after = self.rate_limiter.check(caller)
        if not allowed:
            return SendResult(
                success=False,
                error=f"Rate limit exceeded for {caller}, retry after {retry_after}s",
                rate_limited=True,
                retry_after=retry_after,
            )

        try:
            message = self.client.send_message(
                chat_id,
                text,
                parse_mode=parse_mode or self.default_parse_mode,
                **options,
            )
        except ChannelRateLimitError as e:
            return SendResult(
                success=False,
                error=str(e),
                rate_limited=True,
                retry_after=e.retry_after,
            )
        except DownstreamServiceError as e:
            logger.warning(
                "telegram_send_failed",
                chat_id=chat_id,
                caller=caller,
                status_code=e.status_code,
                error=str(e),
            )
            return SendResult(success=False, error=str(e))
        except requests.RequestException as e:
            logger.warning(
                "telegram_send_failed",
                chat_id=chat_id,
                caller=caller,
                error=str(e),
            )
            return SendResult(success=False, error=f"Telegram request failed: {e}")

        return SendResult(success=True, message_id=message.get("message_id"))
