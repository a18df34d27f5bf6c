"""Core package for the Best Buy stock watcher application."""

__all__ = [
    "config",
    "exceptions",
    "models",
    "api_client",
    "state_manager",
    "notifier",
    "checker",
    "cli",
]
