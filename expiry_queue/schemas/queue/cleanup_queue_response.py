"""Response schema for the queue retention cleanup job."""

from datetime import datetime

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class CleanupQueueResponse(BaseSchemaModel):
    """Rows removed by one retention cleanup."""

    success: bool = Field(..., description="Whether both sweeps completed")
    deleted_expired: int = Field(..., description="Rows past the retention window")
    deleted_processed: int = Field(
        ..., description="Sent/failed rows past the processed retention window"
    )
    total_deleted: int = Field(..., description="Rows removed in total")
    timestamp: datetime = Field(..., description="When the cleanup finished")
