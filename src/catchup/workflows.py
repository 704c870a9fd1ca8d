"""Shared workflow layer between the CLI and the YouTube adapter.

`Playlist` fetches every entry, runs the pure core over them, and applies
the resulting intents through a sink, one at a time.
"""

import logging

from .adapters.dry_run import DryRunSink
from .adapters.youtube import YouTubePlaylistAdapter
from .config import Config
from .core.entries import Entry
from .core.reconcile import Intent, IntentKind, Report, reconcile
from .ports import EntrySink, EntrySource

logger = logging.getLogger(__name__)


def apply_intents(intents: list[Intent], sink: EntrySink) -> int:
    """
    Apply intents strictly in order. Returns the number applied.

    The first failure propagates and the rest are not attempted; every
    intent is idempotent, so the next run picks up where this one stopped.
    """
    applied = 0
    for intent in intents:
        match intent.kind:
            case IntentKind.DELETE:
                sink.delete(intent.entry_id)
            case IntentKind.SET_POSITION:
                sink.set_position(intent.entry_id, intent.position)
        applied += 1
    return applied


class Playlist:
    """
    A curated playlist.

    Implements CollectionHandle protocol. Holds the source and sink plus the
    configuration (playlist id, timezone, dry run, retention cap).
    """

    def __init__(self, source: EntrySource, sink: EntrySink, config: Config):
        self.config = config.validate()
        self.source = source
        self.sink = DryRunSink() if config.dry_run else sink

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def items(self) -> list[Entry]:
        """Fetch every entry. Nothing is classified until all pages are in."""
        return list(self.source.fetch_all())

    def _run(self, report: Report) -> Report:
        if not report.changed:
            logger.info(f"Nothing to change in playlist {self.config.playlist_id}")
            return report
        applied = apply_intents(report.intents, self.sink)
        verb = "Would apply" if self.dry_run else "Applied"
        logger.info(f"{verb} {applied} changes to playlist {self.config.playlist_id}")
        return report

    def sort(self) -> Report:
        """Put entries in canonical order without removing any."""
        return self._run(reconcile(self.items()))

    def prune(self) -> Report:
        """Remove blocked, invalid and surplus entries without reordering."""
        return self._run(reconcile(self.items(), self.config.max_retained, reorder=False))

    def tidy(self) -> Report:
        """Prune, then put the remaining entries in canonical order."""
        return self._run(reconcile(self.items(), self.config.max_retained))

    def print(self) -> list[str]:
        """Render entries in current order as `title:time` lines."""
        tz = self.config.tz()
        return [f"{e.title}:{e.format_time(tz)}" for e in self.items()]


def open_playlist(config: Config) -> Playlist:
    """Build a Playlist backed by the YouTube Data API."""
    adapter = YouTubePlaylistAdapter(
        playlist_id=config.playlist_id,
        region=config.region,
        token_file=config.token_file,
        service_account_file=config.service_account_file,
        client_secret_file=config.client_secret_file,
    )
    return Playlist(source=adapter, sink=adapter, config=config)
