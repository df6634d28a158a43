"""Client for the Telegram Bot API."""

from typing import Any

import requests
import structlog

from expiry_queue.exceptions import ChannelRateLimitError, DownstreamServiceError
from expiry_queue.services.downstream.base_downstream_client import (
    BaseDownstreamClient,
)

logger = structlog.get_logger(__name__)


class TelegramClient(BaseDownstreamClient):
    """Thin wrapper around the Bot API ``sendMessage`` method."""

    def __init__(self, bot_token: str, api_base_url: str, timeout: int):
        """Initialize Telegram client.

        Args:
            bot_token: Bot token issued by BotFather
            api_base_url: Bot API root, e.g. https://api.telegram.org
            timeout: Timeout in seconds for each API call
        """
        super().__init__(
            service_name="telegram",
            base_url=api_base_url,
            timeout=timeout,
        )
        self._bot_token = bot_token

    def _method_url(self, method: str) -> str:
        return f"{self.base_url}/bot{self._bot_token}/{method}"

    def _extract_error_message(self, response: requests.Response) -> str:
        """Use the Bot API ``description`` field when the body is JSON."""
        try:
            body = response.json()
        except ValueError:
            return response.text
        return str(body.get("description") or response.text)

    def _client_error(
        self, response: requests.Response, error_detail: str
    ) -> DownstreamServiceError:
        """Map Bot API flood control (429) to ChannelRateLimitError."""
        if response.status_code != 429:
            return super()._client_error(response, error_detail)

        retry_after = 1
        try:
            parameters = response.json().get("parameters") or {}
            retry_after = int(parameters.get("retry_after", retry_after))
        except (ValueError, TypeError, AttributeError):
            pass
        return ChannelRateLimitError(
            caller="telegram_bot",
            retry_after=retry_after,
            message=f"telegram flood control: {error_detail}",
        )

    def send_message(
        self,
        chat_id: int | str,
        text: str,
        parse_mode: str | None = None,
        **options: Any,
    ) -> dict[str, Any]:
        """Send a text message to a chat.

        Args:
            chat_id: Destination chat
            text: Message text
            parse_mode: Optional Bot API parse mode (HTML, MarkdownV2, ...)
            **options: Extra sendMessage parameters; None values are dropped

        Returns:
            The Bot API ``result`` object (the sent Message).

        Raises:
            ChannelRateLimitError: If Telegram applies flood control (429)
            DownstreamServiceError: If Telegram rejects the message
            DownstreamServiceUnavailableError: If Telegram returns 5xx
            requests.RequestException: For transport failures
        """
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        payload.update(
            {key: value for key, value in options.items() if value is not None}
        )

        response = self._make_request(
            "POST",
            self._method_url("sendMessage"),
            json_data=payload,
            log_url=f"{self.base_url}/bot<redacted>/sendMessage",
        )

        try:
            body = response.json()
        except ValueError as e:
            raise DownstreamServiceError(
                message="telegram returned a non-JSON response",
                service_name=self.service_name,
                status_code=response.status_code,
            ) from e

        if not body.get("ok"):
            raise DownstreamServiceError(
                message=str(
                    body.get("description") or "Telegram rejected the message"
                ),
                service_name=self.service_name,
                status_code=response.status_code,
            )

        result = body.get("result") or {}
        logger.info(
            "telegram_message_sent",
            chat_id=chat_id,
            message_id=result.get("message_id"),
        )
        return result
