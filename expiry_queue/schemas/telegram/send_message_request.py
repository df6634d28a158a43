"""Request schema for relaying a message through the Telegram channel."""

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class SendMessageRequest(BaseSchemaModel):
    """Body accepted by the send endpoint."""

    chat_id: int | str = Field(..., description="Destination chat ID or @channel")
    text: str = Field(..., min_length=1, description="Message text")
    parse_mode: str | None = Field(None, description="HTML, Markdown or MarkdownV2")
    disable_web_page_preview: bool | None = None
    disable_notification: bool | None = None
    reply_to_message_id: int | None = None
    source: str | None = Field(None, description="Caller label for logging")
