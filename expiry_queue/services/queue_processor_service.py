"""Process job: deliver pending reminders through the Telegram channel."""

import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog
from django.db import DatabaseError
from django.utils import timezone

from expiry_queue.config import get_queue_settings
from expiry_queue.constants import QUEUE_PROCESSOR_CALLER
from expiry_queue.enums import QueueStatus
from expiry_queue.logging import clear_job_context, set_job_context
from expiry_queue.models import ExpiringItemQueueEntry
from expiry_queue.repositories import QueueRepository
from expiry_queue.schemas.queue import ProcessQueueResponse
from expiry_queue.services.message_templates import render_expiry_message
from expiry_queue.services.telegram_channel import TelegramChannel

logger = structlog.get_logger(__name__)

NO_PENDING_MESSAGE = "No pending items to process"


class EntryOutcome(str, Enum):
    """What happened to one queue entry during a run."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class RunTotals:
    """Running counters for one process run."""

    processed: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0

    def record(self, outcome: EntryOutcome) -> None:
        if outcome is EntryOutcome.SKIPPED:
            self.skipped += 1
            return
        self.processed += 1
        if outcome is EntryOutcome.SENT:
            self.sent += 1
        else:
            self.failed += 1


class QueueProcessorService:
    """Drains pending queue rows, urgent first.

    Each row is claimed with a conditional ``pending -> processing`` update
    before sending. A row claimed by an overlapping run is skipped. Sends are
    strictly sequential with a short pause between them. A delivery failure
    marks only that row as failed; the run carries on.
    """

    def __init__(
        self,
        channel_factory: Callable[[], TelegramChannel] = TelegramChannel,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._channel_factory = channel_factory
        self._sleep = sleep

    def process_queue(self) -> ProcessQueueResponse:
        """Run one drain of the queue.

        Returns:
            ProcessQueueResponse with aggregate counters. ``success`` is False
            only when pending rows could not be fetched.

        Raises:
            ImproperlyConfigured: If the queue or channel settings are invalid.
                Nothing is claimed in that case.
        """
        config = get_queue_settings()
        channel = self._channel_factory()

        run_id = str(uuid.uuid4())
        set_job_context("process_queue", run_id)
        try:
            logger.info("queue_processing_started", limit=config.max_items_per_run)

            try:
                entries = QueueRepository.get_pending_entries(config.max_items_per_run)
            except DatabaseError as e:
                logger.error("queue_fetch_failed", error=str(e))
                return ProcessQueueResponse(
                    success=False,
                    error=f"Failed to fetch pending items: {e}",
                    timestamp=timezone.now(),
                )

            if not entries:
                logger.info("queue_processing_completed", processed=0)
                return ProcessQueueResponse(
                    success=True,
                    message=NO_PENDING_MESSAGE,
                    timestamp=timezone.now(),
                )

            delay_seconds = config.send_delay_ms / 1000
            totals = RunTotals()
            batches = 0
            for start in range(0, len(entries), config.process_batch_size):
                batch = entries[start : start + config.process_batch_size]
                batches += 1
                self._process_batch(batch, channel, delay_seconds, totals)
                logger.info(
                    "queue_batch_processed",
                    batch=batches,
                    size=len(batch),
                    sent=totals.sent,
                    failed=totals.failed,
                )

            logger.info(
                "queue_processing_completed",
                processed=totals.processed,
                sent=totals.sent,
                failed=totals.failed,
                skipped=totals.skipped,
            )

            return ProcessQueueResponse(
                success=True,
                message=(
                    f"Processed {totals.processed} items: "
                    f"{totals.sent} sent, {totals.failed} failed"
                ),
                total_processed=totals.processed,
                total_sent=totals.sent,
                total_failed=totals.failed,
                total_skipped=totals.skipped,
                batches=batches,
                timestamp=timezone.now(),
            )
        finally:
            clear_job_context()

    def _process_batch(
        self,
        batch: list[ExpiringItemQueueEntry],
        channel: TelegramChannel,
        delay_seconds: float,
        totals: RunTotals,
    ) -> None:
        attempted = False
        for entry in batch:
            if attempted and delay_seconds > 0:
                self._sleep(delay_seconds)
            outcome = self._process_entry(entry, channel)
            totals.record(outcome)
            attempted = outcome is not EntryOutcome.SKIPPED

    def _process_entry(
        self, entry: ExpiringItemQueueEntry, channel: TelegramChannel
    ) -> EntryOutcome:
        """Claim, render, send and record one entry."""
        log = logger.bind(entry_id=str(entry.pk), chat_id=entry.chat_id)

        try:
            claimed = entry.mark_processing()
        except DatabaseError as e:
            log.error("queue_entry_claim_failed", error=str(e))
            return EntryOutcome.FAILED

        if not claimed:
            log.info("queue_entry_skipped", reason="claimed by another run")
            return EntryOutcome.SKIPPED

        try:
            result = channel.send_message(
                entry.chat_id,
                render_expiry_message(entry),
                caller=QUEUE_PROCESSOR_CALLER,
            )
        except Exception as e:
            log.exception("queue_entry_processing_error", error=str(e))
            self._mark_failed_quietly(entry, str(e))
            return EntryOutcome.FAILED

        if not result.success:
            log.warning(
                "queue_entry_failed",
                error=result.error,
                rate_limited=result.rate_limited,
            )
            self._mark_failed_quietly(entry, result.error)
            return EntryOutcome.FAILED

        # Delivered: from here on the row must never end up failed
        try:
            recorded = entry.mark_sent()
        except DatabaseError as e:
            log.error(
                "queue_entry_sent_not_recorded",
                message_id=result.message_id,
                error=str(e),
            )
            return EntryOutcome.SENT

        if not recorded:
            log.warning(
                "queue_entry_sent_not_recorded",
                message_id=result.message_id,
                reason="row changed during send",
            )
        else:
            log.info("queue_entry_sent", message_id=result.message_id)
        return EntryOutcome.SENT

    @staticmethod
    def _mark_failed_quietly(
        entry: ExpiringItemQueueEntry, error: str | None
    ) -> None:
        """Record a failure when the row is still claimed by this run."""
        if entry.status != QueueStatus.PROCESSING.value:
            return
        try:
            entry.mark_failed(error)
        except DatabaseError as e:
            logger.error(
                "queue_entry_mark_failed_error", entry_id=str(entry.pk), error=str(e)
            )


# Global processor instance
queue_processor_service = QueueProcessorService()
