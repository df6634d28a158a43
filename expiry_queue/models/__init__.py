"""Database models for the expiry_queue app."""

from expiry_queue.models.food_item import FoodItem
from expiry_queue.models.queue_entry import (
    ExpiringItemQueueEntry,
    ExpiringItemQueueQuerySet,
)
from expiry_queue.models.user import User

__all__ = [
    "ExpiringItemQueueEntry",
    "ExpiringItemQueueQuerySet",
    "FoodItem",
    "User",
]
