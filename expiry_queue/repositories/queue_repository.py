"""Repository for expiring-items queue persistence."""

from collections.abc import Iterable, Sequence
from datetime import datetime
from uuid import UUID

from django.db import transaction
from django.db.models import Q

from expiry_queue.enums import QueueStatus
from expiry_queue.models import ExpiringItemQueueEntry


class QueueRepository:
    """Data access for the expiring-items queue.

    Writes that must succeed or fail as a unit run inside their own atomic
    block, so one failing batch never poisons the surrounding connection.
    """

    @staticmethod
    def stage_entries(entries: Sequence[ExpiringItemQueueEntry]) -> int:
        """Insert queue entries, ignoring ones already staged.

        The (food_item, days_until_expiry) uniqueness constraint is the
        conflict target: a row that already exists keeps its snapshot and
        its status, so re-running the populator never resets a delivered
        reminder back to pending.

        Args:
            entries: Unsaved queue entries

        Returns:
            Number of rows actually inserted. Entries dropped on conflict,
            for example by an overlapping populate run, are not counted.
        """
        if not entries:
            return 0

        with transaction.atomic():
            ExpiringItemQueueEntry.objects.bulk_create(
                entries, ignore_conflicts=True
            )
            # Primary keys are generated client side, so only inserted rows
            # carry one of the submitted IDs
            return ExpiringItemQueueEntry.objects.filter(
                pk__in=[entry.pk for entry in entries]
            ).count()

    @staticmethod
    def get_staged_item_ids(
        food_item_ids: Iterable[UUID], days_until_expiry: int
    ) -> set[UUID]:
        """Return which of the given items already have a row for this offset."""
        ids = set(food_item_ids)
        if not ids:
            return set()

        return set(
            ExpiringItemQueueEntry.objects.filter(
                food_item_id__in=ids, days_until_expiry=days_until_expiry
            ).values_list("food_item_id", flat=True)
        )

    @staticmethod
    def get_pending_entries(limit: int) -> list[ExpiringItemQueueEntry]:
        """Fetch pending entries in delivery order.

        Args:
            limit: Maximum number of entries to return

        Returns:
            Entries ordered urgent first, then by scheduled_at ascending.
        """
        queryset = ExpiringItemQueueEntry.objects.pending().in_delivery_order()
        return list(queryset[:limit])

    @staticmethod
    def delete_created_before(cutoff: datetime) -> int:
        """Delete entries staged before ``cutoff``.

        Returns:
            Number of entries deleted.
        """
        with transaction.atomic():
            deleted, _ = ExpiringItemQueueEntry.objects.filter(
                created_at__lt=cutoff
            ).delete()
        return deleted

    @staticmethod
    def delete_terminal_before(cutoff: datetime) -> int:
        """Delete sent/failed entries whose last activity predates ``cutoff``.

        Sent entries are aged by processed_at. Failed entries never get a
        processed_at, so they are aged by updated_at instead.

        Returns:
            Number of entries deleted.
        """
        stale = Q(status=QueueStatus.SENT.value, processed_at__lt=cutoff) | Q(
            status=QueueStatus.FAILED.value, updated_at__lt=cutoff
        )
        with transaction.atomic():
            deleted, _ = ExpiringItemQueueEntry.objects.filter(stale).delete()
        return deleted

    @staticmethod
    def get_status_counts() -> dict[str, int]:
        """Return the number of entries per status."""
        return ExpiringItemQueueEntry.objects.status_counts()
