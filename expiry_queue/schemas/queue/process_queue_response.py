"""Response schema for the process-queue job."""

from datetime import datetime

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class ProcessQueueResponse(BaseSchemaModel):
    """Aggregate result of one drain of the queue."""

    success: bool = Field(..., description="False only if the initial fetch failed")
    message: str | None = Field(None, description="Human-readable summary")
    error: str | None = Field(None, description="Fetch error that aborted the run")
    total_processed: int = Field(0, description="Entries attempted")
    total_sent: int = Field(0, description="Entries delivered")
    total_failed: int = Field(0, description="Entries whose delivery failed")
    total_skipped: int = Field(
        0, description="Entries already claimed by an overlapping run"
    )
    batches: int = Field(0, description="Number of batches processed")
    timestamp: datetime = Field(..., description="When the run finished")
