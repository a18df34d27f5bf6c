"""Command-line interface for the Best Buy stock watcher."""

from __future__ import annotations

import logging
import signal
from typing import Any, Optional, Tuple

import click

from .api_client import BestBuyAPIClient
from .checker import PollingLoop
from .config import Config, parse_identifiers, parse_interval
from .exceptions import ConfigError
from .notifier import ConsoleNotifier, GotifyNotifier, Notifier
from .state_manager import AvailabilityTracker

logger = logging.getLogger(__name__)


def _install_signal_handlers(loop: PollingLoop) -> None:
    def _handle(signum: int, _: Any) -> None:
        logger.info("Received signal %s, stopping after the current cycle", signum)
        loop.stop()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


@click.command()
@click.option(
    "--sku",
    "skus",
    multiple=True,
    help="SKU to watch; may be repeated. Overrides the SKUS environment variable.",
)
@click.option(
    "--repeat/--once",
    default=None,
    help="Keep polling on a fixed interval, or run a single check and exit.",
)
@click.option(
    "--interval",
    type=float,
    default=None,
    help="Seconds between polls in repeat mode.",
)
@click.option(
    "--priority",
    type=click.IntRange(min=0),
    default=None,
    help="Notification priority.",
)
@click.option(
    "--no-notify",
    is_flag=True,
    help="Log availability changes without sending notifications.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print notifications to the terminal instead of sending them to Gotify.",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def main(
    skus: Tuple[str, ...],
    repeat: Optional[bool],
    interval: Optional[float],
    priority: Optional[int],
    no_notify: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if dry_run:
        logger.info("DRY RUN mode enabled - notifications will be printed to terminal")

    identifiers = parse_identifiers(skus) if skus else Config.SKUS
    notifications_enabled = Config.NOTIFICATIONS_ENABLED and not no_notify
    try:
        Config.validate(
            identifiers=identifiers,
            notifications_enabled=notifications_enabled,
            dry_run=dry_run,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    notifier: Notifier = ConsoleNotifier() if dry_run else GotifyNotifier()
    loop = PollingLoop(
        fetcher=BestBuyAPIClient(),
        notifier=notifier,
        tracker=AvailabilityTracker(),
        identifiers=identifiers,
        repeat=Config.REPEAT if repeat is None else repeat,
        interval=parse_interval(interval, Config.POLL_INTERVAL),
        notifications_enabled=notifications_enabled,
        priority=Config.NOTIFICATION_PRIORITY if priority is None else priority,
        heartbeat_file=Config.HEARTBEAT_FILE,
    )
    _install_signal_handlers(loop)
    loop.run()
