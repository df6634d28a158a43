"""Exceptions raised by the queue status state machine."""


class InvalidStatusTransition(Exception):
    """A queue entry was asked to move to a status it cannot reach."""

    def __init__(self, entry_id: object, current: str, target: str):
        """Initialize invalid transition error.

        Args:
            entry_id: Primary key of the queue entry
            current: Status the entry is in
            target: Status that was requested
        """
        self.entry_id = entry_id
        self.current = current
        self.target = target
        super().__init__(
            f"Queue entry {entry_id} cannot move from {current} to {target}"
        )
