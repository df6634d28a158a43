"""Repository resolving inventory owners to chat destinations."""

from collections.abc import Iterable
from uuid import UUID

from expiry_queue.models import User


class UserRepository:
    """Repository for encapsulating user database queries.

    The queue engine only needs one thing from users: where to deliver a
    reminder. Owners without a chat destination are an exclusion filter,
    not an error.
    """

    @staticmethod
    def get_chat_ids(user_ids: Iterable[UUID]) -> dict[UUID, int]:
        """Batch lookup of chat destinations for the given users.

        Args:
            user_ids: Owner IDs to resolve (duplicates are ignored)

        Returns:
            Mapping of user ID to chat ID, containing only users that have a
            chat ID configured.

        Example:
            >>> chat_ids = UserRepository.get_chat_ids([uuid1, uuid2])
            >>> chat_ids.get(uuid1)
            111
        """
        unique_ids = set(user_ids)
        if not unique_ids:
            return {}

        rows = User.objects.filter(
            id__in=unique_ids, chat_id__isnull=False
        ).values_list("id", "chat_id")
        return dict(rows)
