"""Pure playlist entry classification - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from enum import IntEnum

from catchup.errors import MalformedEntryError


class Category(IntEnum):
    """Display category, most preferred first."""

    VIEWABLE = 0
    SCHEDULED = 1
    INVALID = 2
    BLOCKED = 3  # blocked but available


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO 8601 API timestamp. Returns None if absent or unparsable.

    A timestamp without an offset is taken to be UTC.
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def video_id_of(item: dict) -> str | None:
    """Video id of a playlistItems resource."""
    details = item.get("contentDetails") or {}
    snippet = item.get("snippet") or {}
    return details.get("videoId") or (snippet.get("resourceId") or {}).get("videoId")


@dataclass(frozen=True)
class Entry:
    """A playlist item: one membership of a video in the playlist."""

    video_id: str
    entry_id: str
    title: str
    scheduled_start_time: datetime | None = None
    actual_start_time: datetime | None = None
    published_at: datetime | None = None
    blocked: bool = False

    @property
    def available_time(self) -> datetime | None:
        """When the content became available, streamed or uploaded."""
        if self.actual_start_time:
            return self.actual_start_time
        if self.published_at and not self.scheduled_start_time:
            return self.published_at
        return None

    @property
    def viewable_time(self) -> datetime | None:
        if self.blocked:
            return None
        return self.available_time

    def available(self) -> bool:
        return self.available_time is not None

    def viewable(self) -> bool:
        return self.viewable_time is not None

    @property
    def category(self) -> Category:
        """
        Category used for ordering.

        Viewable beats scheduled-only; entries with no usable time come next;
        blocked entries that did stream or publish go last.
        """
        if self.viewable():
            return Category.VIEWABLE
        if self.scheduled_start_time:
            return Category.SCHEDULED
        if not self.available():
            return Category.INVALID
        return Category.BLOCKED

    def format_time(self, tz: tzinfo | None = None) -> str:
        """Format the entry's effective time for display."""
        if self.blocked:
            return "blocked"
        if self.viewable_time:
            when = self.viewable_time.astimezone(tz) if tz else self.viewable_time
            return when.strftime("%Y-%m-%d %H:%M")
        if self.scheduled_start_time:
            return "future"
        return "unknown"

    @classmethod
    def from_api(cls, item: dict, video: dict | None, region: str = "") -> "Entry":
        """
        Create Entry from a playlistItems resource and its videos resource.

        `video` is None when the API returned no video for the id, which
        happens for deleted and private videos; such entries are blocked.
        """
        snippet = item.get("snippet") or {}
        details = item.get("contentDetails") or {}

        entry_id = item.get("id")
        video_id = video_id_of(item)
        title = snippet.get("title")
        if not entry_id or not video_id or title is None:
            raise MalformedEntryError(
                f"Playlist item is missing id, video id or title: {item!r}"
            )

        live = (video or {}).get("liveStreamingDetails") or {}
        return cls(
            video_id=video_id,
            entry_id=entry_id,
            title=title,
            scheduled_start_time=parse_timestamp(live.get("scheduledStartTime")),
            actual_start_time=parse_timestamp(live.get("actualStartTime")),
            published_at=parse_timestamp(details.get("videoPublishedAt")),
            blocked=is_blocked(video, region),
        )


def is_blocked(video: dict | None, region: str = "") -> bool:
    """Whether a video resource is unviewable from `region`."""
    if video is None:
        return True
    if (video.get("status") or {}).get("privacyStatus") == "private":
        return True
    if not region:
        return False

    restriction = (video.get("contentDetails") or {}).get("regionRestriction") or {}
    region = region.upper()
    if region in restriction.get("blocked", []):
        return True
    if "allowed" in restriction and region not in restriction["allowed"]:
        return True
    return False
