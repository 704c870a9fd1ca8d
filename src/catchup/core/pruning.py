"""Playlist pruning rules - pure functions, no I/O."""

from dataclasses import dataclass

from catchup.errors import ConfigurationError

from .entries import Entry

BLOCKED = "blocked"
INVALID = "unscheduled and unpublished"
SURPLUS = "surplus"


@dataclass(frozen=True)
class Decision:
    """Whether an entry stays in the playlist, and why not if it doesn't."""

    entry: Entry
    reason: str | None = None

    @property
    def keep(self) -> bool:
        return self.reason is None


def prune_reason(entry: Entry) -> str | None:
    """Reason to remove an entry regardless of how many others there are."""
    if entry.blocked:
        return BLOCKED
    if entry.scheduled_start_time is None and entry.published_at is None:
        return INVALID
    return None


def check_max_retained(max_retained: int) -> int:
    """Validate a retention cap."""
    if isinstance(max_retained, bool) or not isinstance(max_retained, int):
        raise ConfigurationError(f"max_retained must be an integer, got {max_retained!r}")
    if max_retained < 0:
        raise ConfigurationError(f"max_retained must not be negative, got {max_retained}")
    return max_retained


def prune_entries(entries: list[Entry], max_retained: int) -> list[Decision]:
    """
    Decide which entries to keep.

    `entries` must already be in canonical order, so viewable entries are
    newest first and the ones past `max_retained` are the oldest. Scheduled
    entries that have not streamed yet are always kept.

    Pure function - no I/O.
    """
    check_max_retained(max_retained)

    decisions = []
    viewable_seen = 0
    for entry in entries:
        reason = prune_reason(entry)
        if reason is None and entry.viewable():
            viewable_seen += 1
            if viewable_seen > max_retained:
                reason = SURPLUS
        decisions.append(Decision(entry=entry, reason=reason))
    return decisions


def kept(decisions: list[Decision]) -> list[Entry]:
    """Entries that survive pruning, in the same order."""
    return [d.entry for d in decisions if d.keep]


def removed(decisions: list[Decision]) -> list[Decision]:
    """Decisions that remove their entry."""
    return [d for d in decisions if not d.keep]
