"""Queue-related enumerations.

This module holds the lifecycle states of a queue entry and the priority
tiers derived from days-until-expiry. The priority policy lives here, and
only here, so that staging and draining always agree on it.
"""

from enum import Enum


class QueueStatus(str, Enum):
    """Lifecycle status of an expiring-item queue entry.

    pending -> processing -> sent | failed. sent and failed are terminal.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed from this status."""
        return self in (QueueStatus.SENT, QueueStatus.FAILED)

    def can_transition_to(self, target: "QueueStatus") -> bool:
        """Check whether moving from this status to ``target`` is allowed."""
        return target in _ALLOWED_TRANSITIONS[self]

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        """Return Django field choices."""
        return [(member.value, member.name.title()) for member in cls]


_ALLOWED_TRANSITIONS: dict[QueueStatus, frozenset[QueueStatus]] = {
    QueueStatus.PENDING: frozenset({QueueStatus.PROCESSING}),
    QueueStatus.PROCESSING: frozenset({QueueStatus.SENT, QueueStatus.FAILED}),
    QueueStatus.SENT: frozenset(),
    QueueStatus.FAILED: frozenset(),
}


class NotificationPriority(str, Enum):
    """Urgency tier of an expiry reminder.

    Derived solely from days-until-expiry:
    <=0 urgent, 1-2 high, 3-6 medium, >=7 low.
    """

    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def for_days_until_expiry(cls, days_until_expiry: int) -> "NotificationPriority":
        """Map days-until-expiry to its priority tier.

        Args:
            days_until_expiry: Whole days between today and the expiry date.
                Zero or negative means the item expires today or already has.

        Returns:
            The matching NotificationPriority.
        """
        if days_until_expiry <= 0:
            return cls.URGENT
        if days_until_expiry <= 2:
            return cls.HIGH
        if days_until_expiry <= 6:
            return cls.MEDIUM
        return cls.LOW

    @property
    def rank(self) -> int:
        """Sort rank, lower is more urgent."""
        return _PRIORITY_RANKS[self]

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        """Return Django field choices."""
        return [(member.value, member.name.title()) for member in cls]


_PRIORITY_RANKS: dict[NotificationPriority, int] = {
    NotificationPriority.URGENT: 0,
    NotificationPriority.HIGH: 1,
    NotificationPriority.MEDIUM: 2,
    NotificationPriority.LOW: 3,
}
