"""Shared test helpers."""

from datetime import datetime, timedelta, timezone

from catchup.core.entries import Entry

BASE = datetime(2021, 9, 30, 10, 56, 1, tzinfo=timezone.utc)


def at(seconds: int = 0, days: int = 0) -> datetime:
    return BASE + timedelta(days=days, seconds=seconds)


def make_entry(name: str, **kwargs) -> Entry:
    return Entry(video_id=f"vid-{name}", entry_id=f"item-{name}", title=name, **kwargs)
