"""Helpers for building inventory, user and queue rows in tests."""

import uuid
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from faker import Faker

from expiry_queue.enums import NotificationPriority, QueueStatus
from expiry_queue.models import ExpiringItemQueueEntry, FoodItem, User

fake = Faker()


def create_user(chat_id: int | None = 111, **overrides) -> User:
    """Create a bot user, reachable unless chat_id is None."""
    values = {
        "id": uuid.uuid4(),
        "email": fake.email(),
        "chat_id": chat_id,
    }
    values.update(overrides)
    return User.objects.create(**values)


def create_food_item(
    user: User | None = None, expires_in_days: int = 1, **overrides
) -> FoodItem:
    """Create an inventory item expiring ``expires_in_days`` from today."""
    values = {
        "user_id": user.id if user else None,
        "name": fake.word().title(),
        "quantity": Decimal("1"),
        "unit": "piece",
        "expiration_date": timezone.localdate() + timedelta(days=expires_in_days),
        "category": "pantry",
    }
    values.update(overrides)
    return FoodItem.objects.create(**values)


def create_queue_entry(
    food_item: FoodItem | None = None,
    days_until_expiry: int = 1,
    status: QueueStatus = QueueStatus.PENDING,
    chat_id: int = 111,
    **overrides,
) -> ExpiringItemQueueEntry:
    """Create a staged queue row, creating its food item when not given."""
    if food_item is None:
        food_item = create_food_item(
            user=create_user(chat_id=chat_id), expires_in_days=days_until_expiry
        )
    values = {
        "food_item": food_item,
        "user_id": food_item.user_id or uuid.uuid4(),
        "chat_id": chat_id,
        "item_name": food_item.name,
        "quantity": food_item.quantity,
        "unit": food_item.unit,
        "expiration_date": food_item.expiration_date,
        "category": food_item.category,
        "days_until_expiry": days_until_expiry,
        "notification_priority": NotificationPriority.for_days_until_expiry(
            days_until_expiry
        ).value,
        "status": status.value,
    }
    values.update(overrides)
    return ExpiringItemQueueEntry.objects.create(**values)
