"""Repository for read-only inventory queries."""

from datetime import date

from expiry_queue.models import FoodItem


class InventoryRepository:
    """Read access to tracked food items.

    The inventory table is owned by the bot application; this repository
    never writes to it.
    """

    @staticmethod
    def get_items_expiring_on(expiration_date: date) -> list[FoodItem]:
        """Fetch every item whose expiration date is exactly ``expiration_date``.

        Items without an owner are skipped since they can never be delivered.

        Args:
            expiration_date: Calendar date to match

        Returns:
            Items ordered by owner, then name.
        """
        return list(
            FoodItem.objects.filter(
                expiration_date=expiration_date, user_id__isnull=False
            ).order_by("user_id", "name")
        )
