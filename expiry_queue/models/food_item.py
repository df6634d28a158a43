"""Inventory model for tracked perishable items."""

import uuid
from typing import ClassVar

from django.db import models


class FoodItem(models.Model):
    """Perishable item tracked in a user's inventory.

    This model is unmanaged: the inventory schema is owned by the bot
    application. The queue engine only reads it by exact expiration date.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(null=True, blank=True, db_index=True)
    name = models.TextField()
    quantity = models.DecimalField(max_digits=12, decimal_places=3)
    unit = models.TextField()
    expiration_date = models.DateField(db_index=True)
    category = models.TextField()
    image_url = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "food_items"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["expiration_date", "name"]

    def __str__(self) -> str:
        """Return string representation of the item."""
        return f"{self.quantity} {self.unit} of {self.name}"

    def __repr__(self) -> str:
        """Return detailed representation of the item."""
        return (
            f"<FoodItem(id={self.id}, name='{self.name}', "
            f"expiration_date={self.expiration_date})>"
        )
