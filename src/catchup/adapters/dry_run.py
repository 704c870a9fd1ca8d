"""Sink that logs mutations instead of applying them."""

import logging

logger = logging.getLogger(__name__)


class DryRunSink:
    """
    Implements EntrySink protocol without touching the playlist.

    Records what would have been done so callers can report it.
    """

    def __init__(self):
        self.calls: list[tuple[str, str, int | None]] = []

    def set_position(self, entry_id: str, index: int) -> None:
        logger.info(f"[dry run] would move {entry_id} to position {index}")
        self.calls.append(("set_position", entry_id, index))

    def delete(self, entry_id: str) -> None:
        logger.info(f"[dry run] would delete {entry_id}")
        self.calls.append(("delete", entry_id, None))
