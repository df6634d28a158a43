"""Retention cleanup for the expiring-items queue."""

import uuid
from datetime import timedelta

import structlog
from django.utils import timezone

from expiry_queue.config import get_queue_settings
from expiry_queue.logging import clear_job_context, set_job_context
from expiry_queue.repositories import QueueRepository
from expiry_queue.schemas.queue import CleanupQueueResponse

logger = structlog.get_logger(__name__)


class QueueCleanupService:
    """Deletes queue rows that are past their retention window.

    Two sweeps run in order: rows staged more than RETENTION_DAYS ago,
    then sent/failed rows older than PROCESSED_RETENTION_DAYS. Pending and
    processing rows younger than RETENTION_DAYS are never touched.
    Database errors propagate to the caller.
    """

    def cleanup(self) -> CleanupQueueResponse:
        config = get_queue_settings()
        now = timezone.now()

        set_job_context("cleanup_queue", str(uuid.uuid4()))
        try:
            deleted_expired = QueueRepository.delete_created_before(
                now - timedelta(days=config.retention_days)
            )
            deleted_processed = QueueRepository.delete_terminal_before(
                now - timedelta(days=config.processed_retention_days)
            )

            logger.info(
                "queue_cleanup_completed",
                deleted_expired=deleted_expired,
                deleted_processed=deleted_processed,
            )

            return CleanupQueueResponse(
                success=True,
                deleted_expired=deleted_expired,
                deleted_processed=deleted_processed,
                total_deleted=deleted_expired + deleted_processed,
                timestamp=timezone.now(),
            )
        finally:
            clear_job_context()


# Global cleanup instance
queue_cleanup_service = QueueCleanupService()
