"""Response schema for queue statistics."""

from datetime import datetime

from pydantic import Field

from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class QueueStatusBreakdown(BaseSchemaModel):
    """Breakdown of queue entries by status."""

    pending: int = Field(..., description="Entries awaiting delivery")
    processing: int = Field(..., description="Entries claimed by a processor run")
    sent: int = Field(..., description="Entries delivered")
    failed: int = Field(..., description="Entries whose delivery failed")


class QueueStatsResponse(BaseSchemaModel):
    """Queue size and status breakdown."""

    total: int = Field(..., description="Entries currently in the queue")
    status_breakdown: QueueStatusBreakdown
    timestamp: datetime = Field(..., description="When the stats were computed")
