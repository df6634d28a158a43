"""Outcome of one outbound channel delivery attempt."""

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class SendResult(BaseSchemaModel):
    """Success flag plus either the Telegram message ID or an error."""

    success: bool = Field(..., description="Whether Telegram accepted the message")
    message_id: int | None = Field(None, description="Telegram message ID")
    error: str | None = Field(None, description="Failure description")
    rate_limited: bool = Field(False, description="Rejected by the caller budget")
    retry_after: int | None = Field(None, description="Seconds until retry allowed")
