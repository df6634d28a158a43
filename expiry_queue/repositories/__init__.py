"""Data access layer for the expiry_queue app."""

from expiry_queue.repositories.inventory_repository import InventoryRepository
from expiry_queue.repositories.queue_repository import QueueRepository
from expiry_queue.repositories.user_repository import UserRepository

__all__ = ["InventoryRepository", "QueueRepository", "UserRepository"]
