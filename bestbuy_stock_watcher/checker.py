"""Product availability polling loop."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .api_client import AvailabilityFetcher
from .config import DEFAULT_POLL_INTERVAL, DEFAULT_PRIORITY
from .exceptions import FetchError, NotifyError
from .models import Transition
from .notifier import Notifier
from .state_manager import AvailabilityTracker

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    fetch_ok: bool
    transitions: List[Transition] = field(default_factory=list)
    notified: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


class PollingLoop:
    """Coordinate fetching, state tracking, and notifications."""

    def __init__(
        self,
        fetcher: AvailabilityFetcher,
        notifier: Notifier,
        tracker: AvailabilityTracker,
        identifiers: Sequence[str],
        repeat: bool = False,
        interval: float = DEFAULT_POLL_INTERVAL,
        notifications_enabled: bool = True,
        priority: int = DEFAULT_PRIORITY,
        heartbeat_file: Optional[str] = None,
    ) -> None:
        if not identifiers:
            raise ValueError("at least one identifier is required")
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if priority < 0:
            raise ValueError(f"priority must be non-negative, got {priority}")
        self.fetcher = fetcher
        self.notifier = notifier
        self.tracker = tracker
        self.identifiers = list(identifiers)
        self.repeat = repeat
        self.interval = interval
        self.notifications_enabled = notifications_enabled
        self.priority = priority
        self.heartbeat_file = heartbeat_file
        self._stop_event = threading.Event()

    def stop(self) -> None:
        """Cancel the wait between cycles; ``run`` returns after the current cycle."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def _write_heartbeat(self) -> None:
        if not self.heartbeat_file:
            return
        try:
            with open(self.heartbeat_file, "w") as f:
                f.write(str(time.time()))
        except OSError as exc:
            logger.warning("Could not write heartbeat file %s: %s", self.heartbeat_file, exc)

    def _notify(self, transition: Transition, result: CycleResult) -> None:
        try:
            self.notifier.send(transition.title, transition.to_message(), self.priority)
        except NotifyError as exc:
            logger.error("Failed to send notification for SKU %s: %s", transition.identifier, exc)
            result.failed.append(transition.identifier)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error notifying for SKU %s", transition.identifier)
            result.failed.append(transition.identifier)
        else:
            result.notified.append(transition.identifier)

    def run_once(self) -> CycleResult:
        """Run a single fetch, diff and notify cycle. Never raises."""
        try:
            snapshot = self.fetcher.fetch(self.identifiers)
        except FetchError as exc:
            logger.error("Availability fetch failed, skipping cycle: %s", exc)
            return CycleResult(fetch_ok=False)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error fetching availability, skipping cycle")
            return CycleResult(fetch_ok=False)

        self._write_heartbeat()
        result = CycleResult(fetch_ok=True, transitions=self.tracker.observe(snapshot))
        available = sum(1 for product in snapshot if product.available)
        logger.info(
            "Current status - Available: %s, Unavailable: %s, Changed: %s",
            available,
            len(snapshot) - available,
            len(result.transitions),
        )

        for transition in result.transitions:
            if not self.notifications_enabled:
                logger.info("Notifications disabled - %s: %s", transition.title, transition.identifier)
                continue
            self._notify(transition, result)
        return result

    def run(self) -> None:
        """Poll until stopped, or exactly once when repeat mode is off."""
        logger.info(
            "Watching %s SKUs (repeat=%s, interval=%ss)",
            len(self.identifiers),
            self.repeat,
            self.interval,
        )
        # Ticks are scheduled on a fixed period, so cycle duration does not drift the schedule.
        next_tick = time.monotonic()
        while True:
            self.run_once()
            if not self.repeat:
                break
            next_tick += self.interval
            now = time.monotonic()
            if next_tick < now:
                next_tick = now
            if self._stop_event.wait(next_tick - now):
                logger.info("Stop requested, shutting down")
                break
