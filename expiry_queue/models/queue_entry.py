"""Queue model staging one expiry reminder per (item, days-until-expiry).

This module defines the expiring-items queue, the single source of truth for
which reminders still need sending and which were already attempted. Rows are
created by the populator and move through the status state machine defined
in ``expiry_queue.enums.QueueStatus`` as the processor delivers them.
"""

import uuid
from typing import ClassVar

from django.db import models
from django.db.models import Case, IntegerField, Value, When
from django.utils import timezone

from expiry_queue.enums import NotificationPriority, QueueStatus
from expiry_queue.exceptions import InvalidStatusTransition

PRIORITY_RANK = Case(
    *[
        When(notification_priority=priority.value, then=Value(priority.rank))
        for priority in NotificationPriority
    ],
    default=Value(len(NotificationPriority)),
    output_field=IntegerField(),
)


class ExpiringItemQueueQuerySet(models.QuerySet):
    """Query helpers shared by the queue jobs."""

    def pending(self) -> "ExpiringItemQueueQuerySet":
        """Rows still awaiting delivery."""
        return self.filter(status=QueueStatus.PENDING.value)

    def in_delivery_order(self) -> "ExpiringItemQueueQuerySet":
        """Order urgent rows first, oldest scheduled first within a tier."""
        return self.annotate(priority_rank=PRIORITY_RANK).order_by(
            "priority_rank", "scheduled_at", "created_at"
        )

    def status_counts(self) -> dict[str, int]:
        """Return the number of rows per status (every status present)."""
        counts = {status.value: 0 for status in QueueStatus}
        rows = self.order_by().values("status").annotate(count=models.Count("id"))
        for row in rows:
            counts[row["status"]] = row["count"]
        return counts


class ExpiringItemQueueEntry(models.Model):
    """One staged expiry reminder for one (food item, days-until-expiry) pair.

    The descriptive fields are a snapshot taken at staging time, so editing
    the source item later never changes a reminder that is already queued.

    Attributes:
        id: Unique identifier of the queue entry.
        food_item: Inventory item the reminder is about.
        user_id: Owner of the item.
        chat_id: Telegram chat that receives the reminder.
        item_name: Item name at staging time.
        quantity: Item quantity at staging time.
        unit: Quantity unit at staging time.
        expiration_date: Calendar expiry date at staging time.
        category: Item category at staging time.
        days_until_expiry: Days between staging date and expiry date.
        notification_priority: Priority tier derived from days_until_expiry.
        status: Delivery lifecycle status.
        scheduled_at: When the entry became eligible for delivery.
        processed_at: When delivery succeeded (null until then).
        error_message: Channel error from the last failed attempt.
        created_at: When the entry was staged.
        updated_at: When the entry was last changed.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the queue entry",
    )
    food_item = models.ForeignKey(
        "expiry_queue.FoodItem",
        on_delete=models.CASCADE,
        related_name="queue_entries",
        db_column="food_item_id",
        help_text="Inventory item the reminder is about",
    )
    user_id = models.UUIDField(help_text="Owner of the food item")
    chat_id = models.BigIntegerField(help_text="Telegram chat receiving the reminder")
    item_name = models.TextField()
    quantity = models.DecimalField(max_digits=12, decimal_places=3)
    unit = models.TextField()
    expiration_date = models.DateField()
    category = models.TextField()
    days_until_expiry = models.IntegerField()
    notification_priority = models.CharField(
        max_length=10,
        choices=NotificationPriority.choices(),
        help_text="low (7+ days), medium (3-6), high (1-2), urgent (today)",
    )
    status = models.CharField(
        max_length=20,
        choices=QueueStatus.choices(),
        default=QueueStatus.PENDING.value,
        help_text="Processing status: pending, processing, sent, failed",
    )
    scheduled_at = models.DateTimeField(default=timezone.now)
    processed_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ExpiringItemQueueQuerySet.as_manager()

    class Meta:
        """Django model metadata."""

        db_table = "expiring_items_queue"
        ordering: ClassVar[list[str]] = ["scheduled_at"]
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["food_item", "days_until_expiry"],
                name="uniq_queue_item_days_until_expiry",
            ),
        ]
        indexes: ClassVar[list] = [
            models.Index(fields=["status"], name="idx_expiring_queue_status"),
            models.Index(fields=["scheduled_at"], name="idx_expiring_queue_sched"),
            models.Index(fields=["user_id"], name="idx_expiring_queue_user_id"),
            models.Index(fields=["expiration_date"], name="idx_expiring_queue_exp"),
            models.Index(fields=["created_at"], name="idx_expiring_queue_created"),
        ]

    def __str__(self) -> str:
        """Return string representation of the queue entry."""
        return f"{self.item_name} in {self.days_until_expiry}d - {self.status}"

    def __repr__(self) -> str:
        """Return detailed representation of the queue entry."""
        return (
            f"<ExpiringItemQueueEntry(id={self.id}, "
            f"food_item={self.food_item_id}, "
            f"days={self.days_until_expiry}, "
            f"status={self.status})>"
        )

    def mark_processing(self) -> bool:
        """Claim the entry for delivery.

        The update only applies while the row is still pending, so two
        overlapping processor runs cannot both claim it.

        Returns:
            True if this caller claimed the entry, False if it was taken.
        """
        return self._transition(QueueStatus.PROCESSING)

    def mark_sent(self) -> bool:
        """Mark the entry as delivered and stamp processed_at."""
        return self._transition(
            QueueStatus.SENT, processed_at=timezone.now(), error_message=None
        )

    def mark_failed(self, error_msg: str | None = None) -> bool:
        """Mark the entry as failed, leaving processed_at empty.

        Args:
            error_msg: Description of the delivery failure.
        """
        return self._transition(QueueStatus.FAILED, error_message=error_msg)

    def _transition(self, target: QueueStatus, **fields) -> bool:
        """Apply a guarded status change as a conditional UPDATE.

        Raises:
            InvalidStatusTransition: If the state machine forbids the move.
        """
        current = QueueStatus(self.status)
        if not current.can_transition_to(target):
            raise InvalidStatusTransition(self.pk, current.value, target.value)

        now = timezone.now()
        updated = type(self).objects.filter(pk=self.pk, status=current.value).update(
            status=target.value, updated_at=now, **fields
        )
        if not updated:
            return False

        self.status = target.value
        self.updated_at = now
        for name, value in fields.items():
            setattr(self, name, value)
        return True
