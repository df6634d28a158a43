"""Schemas for the expiry_queue app."""

from expiry_queue.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from expiry_queue.schemas.queue import (
    CleanupQueueResponse,
    DayRangeResult,
    PopulateQueueRequest,
    PopulateQueueResponse,
    ProcessQueueResponse,
    QueueStatsResponse,
    QueueStatusBreakdown,
)
from expiry_queue.schemas.telegram import SendMessageRequest, SendResult

__all__ = [
    "CleanupQueueResponse",
    "DayRangeResult",
    "DependencyHealth",
    "LivenessResponse",
    "PopulateQueueRequest",
    "PopulateQueueResponse",
    "ProcessQueueResponse",
    "QueueStatsResponse",
    "QueueStatusBreakdown",
    "ReadinessResponse",
    "SendMessageRequest",
    "SendResult",
]
