"""Services for the expiry_queue app."""

from expiry_queue.services.health_service import HealthService, health_service
from expiry_queue.services.queue_cleanup_service import (
    QueueCleanupService,
    queue_cleanup_service,
)
from expiry_queue.services.queue_populator_service import (
    QueuePopulatorService,
    queue_populator_service,
)
from expiry_queue.services.queue_processor_service import (
    QueueProcessorService,
    queue_processor_service,
)
from expiry_queue.services.queue_stats_service import (
    QueueStatsService,
    queue_stats_service,
)
from expiry_queue.services.rate_limiter import TokenBucketRateLimiter
from expiry_queue.services.telegram_channel import TelegramChannel

__all__ = [
    "HealthService",
    "QueueCleanupService",
    "QueuePopulatorService",
    "QueueProcessorService",
    "QueueStatsService",
    "TelegramChannel",
    "TokenBucketRateLimiter",
    "health_service",
    "queue_cleanup_service",
    "queue_populator_service",
    "queue_processor_service",
    "queue_stats_service",
]
