"""Collection handle interface."""

from typing import Protocol

from catchup.core.entries import Entry
from catchup.core.reconcile import Report


class CollectionHandle(Protocol):
    """Interface for a curated playlist."""

    def items(self) -> list[Entry]:
        """Fetch the entries in their current order."""
        ...

    def sort(self) -> Report:
        """Put entries in canonical order."""
        ...

    def prune(self) -> Report:
        """Remove blocked, invalid and surplus entries."""
        ...

    def print(self) -> list[str]:
        """Render entries one line each."""
        ...
