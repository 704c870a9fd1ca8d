"""catchup CLI - keeps a catch-up playlist in order."""

import json
import logging
import sys

import click

from .config import load_config
from .core.reconcile import Report
from .errors import CatchupError
from .workflows import open_playlist


@click.group()
@click.version_option()
@click.option("--playlist", "playlist_id", default=None, help="Playlist id (overrides catchup.conf)")
@click.option("--timezone", default=None, help="Timezone for displayed times")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, playlist_id: str | None, timezone: str | None, debug: bool):
    """catchup - curate a YouTube catch-up playlist."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )
    logging.getLogger("catchup").setLevel(logging.DEBUG if debug else logging.INFO)

    try:
        config = load_config()
    except CatchupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if playlist_id:
        config.playlist_id = playlist_id
    if timezone:
        config.timezone = timezone
    ctx.obj = config


def _show_report(report: Report, as_json: bool, dry_run: bool) -> None:
    """Shared report display logic."""
    if as_json:
        data = report.to_dict()
        data["dry_run"] = dry_run
        click.echo(json.dumps(data, indent=2))
        return

    if not report.changed:
        click.echo("Playlist already in order." if report.in_order else "Nothing to remove.")
        return

    for action in report.actions:
        click.echo(f"  {action.describe():32} {action.title}")
    prefix = "Dry run: would make" if dry_run else "Made"
    click.echo(f"\n{prefix} {len(report.intents)} changes.")


def _run(config, operation: str, as_json: bool) -> None:
    try:
        playlist = open_playlist(config)
        report = getattr(playlist, operation)()
    except CatchupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    _show_report(report, as_json, config.dry_run)


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_entries(config, as_json: bool):
    """List playlist entries in their current order."""
    try:
        playlist = open_playlist(config)
        if as_json:
            tz = config.tz()
            entries = playlist.items()
        else:
            lines = playlist.print()
    except CatchupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "entry_id": e.entry_id,
                        "video_id": e.video_id,
                        "title": e.title,
                        "category": e.category.name.lower(),
                        "available_time": e.available_time.isoformat() if e.available_time else None,
                        "scheduled_start_time": (
                            e.scheduled_start_time.isoformat() if e.scheduled_start_time else None
                        ),
                        "blocked": e.blocked,
                        "display": e.format_time(tz),
                    }
                    for e in entries
                ],
                indent=2,
            )
        )
    else:
        if not lines:
            click.echo("Playlist is empty.")
            return
        for line in lines:
            click.echo(line)


@main.command()
@click.option("--dry-run", is_flag=True, help="Report changes without applying them")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def sort(config, dry_run: bool, as_json: bool):
    """Put the playlist in canonical order."""
    config.dry_run = config.dry_run or dry_run
    _run(config, "sort", as_json)


@main.command()
@click.option("--max", "max_retained", type=int, default=None, help="Viewable entries to keep")
@click.option("--dry-run", is_flag=True, help="Report changes without applying them")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def prune(config, max_retained: int | None, dry_run: bool, as_json: bool):
    """Remove blocked, invalid and surplus entries."""
    if max_retained is not None:
        config.max_retained = max_retained
    config.dry_run = config.dry_run or dry_run
    _run(config, "prune", as_json)


@main.command()
@click.option("--max", "max_retained", type=int, default=None, help="Viewable entries to keep")
@click.option("--dry-run", is_flag=True, help="Report changes without applying them")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def tidy(config, max_retained: int | None, dry_run: bool, as_json: bool):
    """Prune the playlist, then sort what is left."""
    if max_retained is not None:
        config.max_retained = max_retained
    config.dry_run = config.dry_run or dry_run
    _run(config, "tidy", as_json)


@main.command()
@click.pass_obj
def auth(config):
    """Authenticate with YouTube."""
    from .adapters.youtube import YouTubePlaylistAdapter

    if not config.client_secret_file:
        click.echo("CLIENT_SECRET_FILE not set in catchup.conf", err=True)
        sys.exit(1)

    adapter = YouTubePlaylistAdapter(
        playlist_id=config.playlist_id,
        token_file=config.token_file,
        client_secret_file=config.client_secret_file,
    )
    if adapter.authenticate():
        click.echo(f"✓ Token saved to {adapter._token_path}")
    else:
        click.echo("✗ Authentication failed", err=True)
        sys.exit(1)
