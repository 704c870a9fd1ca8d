"""Entry source interface."""

from typing import Protocol

from catchup.core.entries import Entry


class EntrySource(Protocol):
    """Interface for reading every entry of a playlist."""

    def fetch_all(self) -> list[Entry]:
        """Fetch all entries, every page, in current playlist order."""
        ...
