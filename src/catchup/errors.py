"""Error types raised by catchup."""


class CatchupError(Exception):
    """Base class for catchup errors."""

    pass


class MalformedEntryError(CatchupError):
    """Raised when a playlist item lacks a field needed to identify it."""

    pass


class ExternalCallError(CatchupError):
    """Raised when the YouTube API (or another source/sink) call fails."""

    pass


class ConfigurationError(CatchupError):
    """Raised when configuration is invalid. Detected before any API call."""

    pass
