"""Adapters - I/O implementations of ports."""

from .youtube import YouTubePlaylistAdapter
from .dry_run import DryRunSink

__all__ = [
    "YouTubePlaylistAdapter",
    "DryRunSink",
]
