"""
CLI for DiffFeed.

Scans a directory, records what was added or removed since the previous
run and prints the resulting RSS feed. Meant to run from cron:

    difffeed path [storage.yml [http://base-uri/ [title [max-items]]]] > changes.rss
"""

from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from difffeed.core.config import DiffFeedConfig, load_config
from difffeed.core.errors import HistoryStoreError, InvalidPathError
from difffeed.core.logging_setup import configure_logging
from difffeed.services import FeedService

# Diagnostics only; the feed itself goes to stdout untouched by Rich
err_console = Console(stderr=True)

app = typer.Typer(
    name="difffeed",
    help="DiffFeed - RSS feed of new and deleted files in a directory",
    add_completion=False,
)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    raise typer.Exit(1)


def build_config(
    config_file: Optional[Path],
    storage_file: Optional[str],
    feed_link: Optional[str],
    feed_title: Optional[str],
    max_items: Optional[int],
) -> DiffFeedConfig:
    """
    Load configuration and apply positional argument overrides.

    Precedence, lowest first: defaults.yaml, config file, DIFFFEED_*
    environment variables, positional arguments.
    """
    config = load_config(config_file)

    if storage_file is not None:
        config.storage.path = storage_file
    if feed_link is not None:
        config.feed.link = feed_link
    if feed_title is not None:
        config.feed.title = feed_title
    if max_items is not None:
        config.feed.max_items = max_items

    return config


@app.command()
def main(
    path: Path = typer.Argument(..., help="Directory to scan"),
    storage_file: Optional[str] = typer.Argument(
        None, help="File keeping the history between runs [default: difffeed.yml]"
    ),
    feed_link: Optional[str] = typer.Argument(None, help="Feed link / base URI"),
    feed_title: Optional[str] = typer.Argument(None, help="Feed title"),
    max_items: Optional[int] = typer.Argument(
        None, min=1, help="Maximum number of change events kept [default: 30]"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML or JSON configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """Print an RSS feed of the files added to and removed from PATH."""
    load_dotenv()

    try:
        config = build_config(config_file, storage_file, feed_link, feed_title, max_items)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        _fail(f"Invalid configuration: {e}")

    configure_logging(config.logging, verbose=verbose)

    service = FeedService(config)
    try:
        service.run(path, emit=lambda feed: typer.echo(feed, nl=False))
    except InvalidPathError as e:
        _fail(str(e))
    except HistoryStoreError as e:
        _fail(str(e))
