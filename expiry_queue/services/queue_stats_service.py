"""Queue statistics."""

from django.utils import timezone

from expiry_queue.repositories import QueueRepository
from expiry_queue.schemas.queue import QueueStatsResponse, QueueStatusBreakdown


class QueueStatsService:
    """Reports how many queue rows sit in each status."""

    def get_queue_stats(self) -> QueueStatsResponse:
        counts = QueueRepository.get_status_counts()
        return QueueStatsResponse(
            total=sum(counts.values()),
            status_breakdown=QueueStatusBreakdown(**counts),
            timestamp=timezone.now(),
        )


# Global stats instance
queue_stats_service = QueueStatsService()
