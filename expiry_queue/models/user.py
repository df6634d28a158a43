"""User model exposing the chat destination of each inventory owner."""

import uuid
from typing import ClassVar

from django.db import models


class User(models.Model):
    """User model matching the bot application's users table.

    This model is unmanaged as the database schema is owned by another
    service. The queue engine only reads ``chat_id`` to decide where an
    expiry reminder is delivered; users without one are never notified.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, null=True, blank=True)
    chat_id = models.BigIntegerField(
        null=True,
        blank=True,
        help_text="Telegram chat ID for bot interactions",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.email or self.id} (chat {self.chat_id})"

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(id={self.id}, chat_id={self.chat_id})>"
