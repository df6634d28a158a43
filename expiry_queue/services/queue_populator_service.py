"""Populate job: stage reminders for items expiring within the horizon."""

import uuid
from collections.abc import Sequence
from datetime import date, datetime, timedelta

import structlog
from django.db import DatabaseError
from django.utils import timezone

from expiry_queue.config import get_queue_settings
from expiry_queue.enums import NotificationPriority, QueueStatus
from expiry_queue.logging import clear_job_context, set_job_context
from expiry_queue.models import ExpiringItemQueueEntry, FoodItem
from expiry_queue.repositories import (
    InventoryRepository,
    QueueRepository,
    UserRepository,
)
from expiry_queue.schemas.queue import DayRangeResult, PopulateQueueResponse

logger = structlog.get_logger(__name__)


class QueuePopulatorService:
    """Stages one pending queue row per (item, offset) for offsets 0..horizon.

    Offset ``d`` matches items whose expiration date is exactly today + d,
    with "today" taken in the configured TIME_ZONE. Owners without a chat
    destination are skipped. Rows that already exist are left untouched, so
    running the job twice on the same day stages nothing new.
    """

    def populate_queue(self, days_ahead: int | None = None) -> PopulateQueueResponse:
        """Run one populate pass.

        Args:
            days_ahead: Horizon in days; defaults to EXPIRY_QUEUE["DAYS_AHEAD"]

        Returns:
            PopulateQueueResponse with one DayRangeResult per offset.

        Raises:
            ImproperlyConfigured: If the queue settings are invalid.
            ValueError: If days_ahead is negative.
        """
        config = get_queue_settings()
        horizon = config.days_ahead if days_ahead is None else days_ahead
        if horizon < 0:
            raise ValueError(f"days_ahead must be >= 0, got {horizon}")

        run_id = str(uuid.uuid4())
        set_job_context("populate_queue", run_id)
        try:
            logger.info("queue_population_started", days_ahead=horizon)

            cleaned_up = self._sweep_stale_entries(config.staging_retention_days)

            today = timezone.localdate()
            staged_at = timezone.now()
            results = [
                self._populate_offset(
                    today, offset, staged_at, config.populate_batch_size
                )
                for offset in range(horizon + 1)
            ]

            total_processed = sum(result.processed for result in results)
            success = not all(result.failed for result in results)

            logger.info(
                "queue_population_completed",
                success=success,
                total_processed=total_processed,
                failed_offsets=[r.days_ahead for r in results if r.failed],
            )

            return PopulateQueueResponse(
                success=success,
                total_processed=total_processed,
                days_ahead=horizon,
                cleaned_up=cleaned_up,
                results=results,
                timestamp=timezone.now(),
            )
        finally:
            clear_job_context()

    def _sweep_stale_entries(self, retention_days: int) -> int | None:
        """Delete rows staged more than ``retention_days`` ago.

        A failing sweep is logged and does not stop staging.
        """
        cutoff = timezone.now() - timedelta(days=retention_days)
        try:
            deleted = QueueRepository.delete_created_before(cutoff)
        except DatabaseError as e:
            logger.error("queue_sweep_failed", cutoff=cutoff.isoformat(), error=str(e))
            return None

        if deleted:
            logger.info("queue_sweep_completed", deleted=deleted)
        return deleted

    def _populate_offset(
        self,
        today: date,
        offset: int,
        staged_at: datetime,
        batch_size: int,
    ) -> DayRangeResult:
        """Stage rows for items expiring exactly ``offset`` days from today."""
        target_date = today + timedelta(days=offset)
        log = logger.bind(days_ahead=offset, target_date=target_date.isoformat())

        try:
            items = InventoryRepository.get_items_expiring_on(target_date)
            chat_ids = UserRepository.get_chat_ids(item.user_id for item in items)
            already_staged = QueueRepository.get_staged_item_ids(
                (item.id for item in items), offset
            )
        except DatabaseError as e:
            log.error("queue_offset_fetch_failed", error=str(e))
            return DayRangeResult(
                days_ahead=offset, target_date=target_date, error=str(e)
            )

        reachable = [item for item in items if item.user_id in chat_ids]
        new_items = [item for item in reachable if item.id not in already_staged]
        entries = [
            self._build_entry(item, chat_ids[item.user_id], offset, staged_at)
            for item in new_items
        ]

        processed = 0
        already_queued = len(reachable) - len(new_items)
        failed_batches = 0
        last_error = None
        for batch in _chunks(entries, batch_size):
            try:
                inserted = QueueRepository.stage_entries(batch)
                processed += inserted
                already_queued += len(batch) - inserted
            except DatabaseError as e:
                failed_batches += 1
                last_error = str(e)
                log.error(
                    "queue_batch_stage_failed", batch_size=len(batch), error=str(e)
                )

        log.info(
            "queue_offset_staged",
            matched=len(items),
            unreachable=len(items) - len(reachable),
            already_queued=already_queued,
            processed=processed,
            failed_batches=failed_batches,
        )

        return DayRangeResult(
            days_ahead=offset,
            target_date=target_date,
            processed=processed,
            already_queued=already_queued,
            failed_batches=failed_batches,
            error=last_error,
        )

    @staticmethod
    def _build_entry(
        item: FoodItem, chat_id: int, offset: int, staged_at: datetime
    ) -> ExpiringItemQueueEntry:
        """Snapshot an inventory item into an unsaved pending queue row."""
        return ExpiringItemQueueEntry(
            food_item_id=item.id,
            user_id=item.user_id,
            chat_id=chat_id,
            item_name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            expiration_date=item.expiration_date,
            category=item.category,
            days_until_expiry=offset,
            notification_priority=NotificationPriority.for_days_until_expiry(
                offset
            ).value,
            status=QueueStatus.PENDING.value,
            scheduled_at=staged_at,
            created_at=staged_at,
        )


def _chunks(entries: Sequence, size: int):
    for start in range(0, len(entries), size):
        yield entries[start : start + size]


# Global populator instance
queue_populator_service = QueuePopulatorService()
