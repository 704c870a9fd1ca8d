"""Canonical playlist ordering - pure functions, no I/O."""

from datetime import datetime

from .entries import Category, Entry


def _newest_first(a: datetime, b: datetime) -> int:
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def compare_entries(v: Entry, w: Entry) -> int:
    """
    Compare two entries for canonical order.

    Returns a negative number if `v` comes first, positive if `w` does, and 0
    when there is nothing to tell them apart (the sort keeps them as found).

    Viewable entries come first, newest first. Then scheduled-only entries,
    latest schedule first. Then entries with no time at all, and finally
    blocked entries that have an available time, newest first.
    """
    if v.viewable():
        return _newest_first(v.viewable_time, w.viewable_time) if w.viewable() else -1
    if w.viewable():
        return 1
    if v.scheduled_start_time:
        if w.scheduled_start_time:
            return _newest_first(v.scheduled_start_time, w.scheduled_start_time)
        return -1
    if w.scheduled_start_time:
        return 1
    if v.available():
        # Blocked but available entries go after the ones with no time
        return _newest_first(v.available_time, w.available_time) if w.available() else 1
    if w.available():
        return -1
    return 0


def sort_key(entry: Entry) -> tuple[int, float]:
    """Sort key equivalent to compare_entries, for use with sorted()."""
    match entry.category:
        case Category.VIEWABLE:
            return (Category.VIEWABLE, -entry.viewable_time.timestamp())
        case Category.SCHEDULED:
            return (Category.SCHEDULED, -entry.scheduled_start_time.timestamp())
        case Category.BLOCKED:
            return (Category.BLOCKED, -entry.available_time.timestamp())
        case _:
            return (Category.INVALID, 0.0)


def sort_entries(entries: list[Entry]) -> list[Entry]:
    """
    Sort entries into canonical order.

    Pure function - no I/O. The sort is stable, so entries that compare
    equal keep their relative order.
    """
    return sorted(entries, key=sort_key)


def is_canonical(entries: list[Entry]) -> bool:
    """Check whether entries are already in canonical order."""
    return [e.entry_id for e in sort_entries(entries)] == [e.entry_id for e in entries]
