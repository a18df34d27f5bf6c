"""Notification backends."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from .config import Config
from .exceptions import NotifyError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, title: str, message: str, priority: int = 0) -> None: ...


class GotifyNotifier:
    """Push messages to a Gotify server."""

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = (url or Config.GOTIFY_URL or "").rstrip("/")
        self.token = token if token is not None else Config.GOTIFY_TOKEN
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def send(self, title: str, message: str, priority: int = 0) -> None:
        if priority < 0:
            raise ValueError(f"priority must be non-negative, got {priority}")
        if not self.url or not self.token:
            raise NotifyError("Gotify URL or token is not set.")

        payload = {"title": title, "message": message, "priority": priority}
        try:
            response = self.session.post(
                f"{self.url}/message",
                json=payload,
                headers={"X-Gotify-Key": self.token},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NotifyError(f"Failed to reach Gotify: {exc}") from exc

        if not response.ok:
            raise NotifyError(f"Gotify API error: {response.status_code}", response.status_code)
        logger.info("Notification sent: %s", title)


class ConsoleNotifier:
    """Print notifications to the terminal instead of sending them."""

    @staticmethod
    def send(title: str, message: str, priority: int = 0) -> None:
        print("\n" + "=" * 50)
        print(f"DRY RUN - Notification Preview (priority {priority}):")
        print("=" * 50)
        print(title)
        print("─" * 25)
        print(message)
        print("=" * 50)
        logger.info("DRY RUN: Would send notification %r", title)
