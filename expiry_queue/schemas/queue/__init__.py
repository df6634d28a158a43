"""Queue job schemas."""

from expiry_queue.schemas.queue.cleanup_queue_response import CleanupQueueResponse
from expiry_queue.schemas.queue.day_range_result import DayRangeResult
from expiry_queue.schemas.queue.populate_queue_request import PopulateQueueRequest
from expiry_queue.schemas.queue.populate_queue_response import PopulateQueueResponse
from expiry_queue.schemas.queue.process_queue_response import ProcessQueueResponse
from expiry_queue.schemas.queue.queue_stats_response import (
    QueueStatsResponse,
    QueueStatusBreakdown,
)

__all__ = [
    "CleanupQueueResponse",
    "DayRangeResult",
    "PopulateQueueRequest",
    "PopulateQueueResponse",
    "ProcessQueueResponse",
    "QueueStatsResponse",
    "QueueStatusBreakdown",
]
