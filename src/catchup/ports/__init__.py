"""Ports - interfaces/protocols for external dependencies."""

from .entry_source import EntrySource
from .entry_sink import EntrySink
from .collection import CollectionHandle

__all__ = [
    "EntrySource",
    "EntrySink",
    "CollectionHandle",
]
