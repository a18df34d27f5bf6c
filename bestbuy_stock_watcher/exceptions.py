"""Exception hierarchy for the stock watcher."""

from __future__ import annotations

from typing import Optional


class WatcherError(Exception):
    """Base exception for all stock watcher errors."""


class ConfigError(WatcherError):
    """A required configuration value is missing."""


class FetchError(WatcherError):
    """Transport or decode failure while querying product availability."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NotifyError(WatcherError):
    """Transport or decode failure while sending a notification."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
