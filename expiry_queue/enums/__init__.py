"""Enumerations for the expiry_queue app."""

from expiry_queue.enums.health_status import HealthStatus
from expiry_queue.enums.queue import NotificationPriority, QueueStatus

__all__ = ["HealthStatus", "NotificationPriority", "QueueStatus"]
