"""Reminder message texts."""

from decimal import Decimal

from expiry_queue.models import ExpiringItemQueueEntry


def format_quantity(quantity: Decimal | int | float | str) -> str:
    """Render a quantity without trailing zeros (``1.500`` -> ``1.5``)."""
    value = Decimal(str(quantity)).normalize()
    return format(value, "f")


def render_expiry_message(entry: ExpiringItemQueueEntry) -> str:
    """Build the reminder text for a queue entry.

    The wording depends only on ``days_until_expiry``: zero or less reads as
    expiring today, one as tomorrow, anything else as a countdown.
    """
    amount = f"{format_quantity(entry.quantity)} {entry.unit} of {entry.item_name}"
    days = entry.days_until_expiry

    if days <= 0:
        headline = f"🚨 ALERT: Your {amount} expires TODAY!"
    elif days == 1:
        headline = f"⚠️ WARNING: Your {amount} expires TOMORROW!"
    else:
        headline = f"📅 REMINDER: Your {amount} expires in {days} days."

    return f"{headline}\n📂 Category: {entry.category}"
