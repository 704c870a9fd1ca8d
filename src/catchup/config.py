"""Configuration management for catchup."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.pruning import check_max_retained
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CATCHUP_HOME = Path(os.environ.get("CATCHUP_HOME", Path.home() / "catchup"))
CONFIG_FILE = CATCHUP_HOME / "config" / "catchup.conf"
TOKEN_FILE = CATCHUP_HOME / "config" / "token.json"

# "Christ Church Winchester | Church Online Catch Up"
DEFAULT_PLAYLIST = "PLz-8ZbAJhahjvkPtduhnB4TzhVcj5ZtfC"


@dataclass
class Config:
    """catchup configuration."""

    playlist_id: str = DEFAULT_PLAYLIST
    timezone: str = "Europe/London"
    region: str = "GB"
    max_retained: int = 20
    dry_run: bool = False
    service_account_file: str = ""
    client_secret_file: str = ""
    token_file: str = str(TOKEN_FILE)

    def validate(self) -> "Config":
        """Raise ConfigurationError if any setting is unusable."""
        if not self.playlist_id:
            raise ConfigurationError("No playlist id configured")
        check_max_retained(self.max_retained)
        self.tz()
        return self

    def tz(self) -> ZoneInfo:
        """The configured display timezone."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone: {self.timezone!r}") from e


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


def load_config(path: Path | None = None) -> Config:
    """Load configuration from catchup.conf, then the environment."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = value.strip()

            # Handle quoted values with inline comments: "value" # comment
            if value.startswith('"') or value.startswith("'"):
                quote = value[0]
                end_quote = value.find(quote, 1)
                value = value[1:end_quote] if end_quote != -1 else value[1:]
            elif "#" in value:
                value = value.split("#")[0].strip()

            match key:
                case "playlist_id":
                    config.playlist_id = value
                case "timezone":
                    config.timezone = value
                case "region":
                    config.region = value.upper()
                case "max_retained":
                    try:
                        config.max_retained = int(value)
                    except ValueError as e:
                        raise ConfigurationError(
                            f"max_retained must be an integer, got {value!r}"
                        ) from e
                case "dry_run":
                    config.dry_run = _parse_bool(value)
                case "service_account_file":
                    config.service_account_file = value
                case "client_secret_file":
                    config.client_secret_file = value
                case "token_file":
                    config.token_file = value
                case _:
                    logger.warning(f"Unknown setting in {path.name}: {key}")

    env_key_file = os.environ.get("YOUTUBE_SERVICE_ACCOUNT_FILE")
    if env_key_file:
        config.service_account_file = env_key_file

    return config
