"""Request schema for the populate-queue job."""

from pydantic import Field

from expiry_queue.constants import MAX_DAYS_AHEAD
from expiry_queue.schemas.base_schema_model import BaseSchemaModel


class PopulateQueueRequest(BaseSchemaModel):
    """Optional overrides for a populate run."""

    days_ahead: int | None = Field(
        None,
        ge=0,
        le=MAX_DAYS_AHEAD,
        description="Horizon in days (defaults to the configured horizon)",
    )
