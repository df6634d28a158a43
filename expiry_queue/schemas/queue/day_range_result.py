"""Schema for the populate outcome of a single days-ahead offset."""

from datetime import date

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class DayRangeResult(BaseSchemaModel):
    """Populate outcome for one offset from today."""

    days_ahead: int = Field(..., description="Offset from today, in days")
    target_date: date = Field(..., description="Expiration date that was matched")
    processed: int = Field(0, description="Queue rows written for this offset")
    already_queued: int = Field(
        0, description="Matching items already staged by an earlier or concurrent run"
    )
    failed_batches: int = Field(0, description="Write batches that failed")
    error: str | None = Field(None, description="Error that aborted or degraded it")

    @property
    def failed(self) -> bool:
        """Whether nothing could be staged for this offset because of an error."""
        return self.error is not None and self.processed == 0
