"""Entry sink interface."""

from typing import Protocol


class EntrySink(Protocol):
    """Interface for mutating a playlist. Both calls must be idempotent."""

    def set_position(self, entry_id: str, index: int) -> None:
        """Move an entry to a zero-based position."""
        ...

    def delete(self, entry_id: str) -> None:
        """Remove an entry from the playlist."""
        ...
