"""Response schema for the populate-queue job."""

from datetime import datetime

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel
from expiry_queue.schemas.queue.day_range_result import DayRangeResult


class PopulateQueueResponse(BaseSchemaModel):
    """Result of one populate run.

    ``success`` is False only when every offset in the horizon failed.
    """

    success: bool = Field(..., description="Whether at least one offset succeeded")
    total_processed: int = Field(..., description="Queue rows written in total")
    days_ahead: int = Field(..., description="Horizon used for this run")
    cleaned_up: int | None = Field(
        None, description="Stale rows removed before staging (None if sweep failed)"
    )
    results: list[DayRangeResult] = Field(..., description="Per-offset breakdown")
    timestamp: datetime = Field(..., description="When the run finished")
