"""Application configuration and logging setup."""

from __future__ import annotations

import logging
import math
import os
from typing import Dict, Iterable, List, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 300.0
DEFAULT_PRIORITY = 0
DEFAULT_REQUEST_TIMEOUT = 10.0

_TRUTHY = ("true", "1", "yes", "on")
_FALSY = ("false", "0", "no", "off")


def parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def parse_interval(
    raw: Optional[str | float],
    default: float = DEFAULT_POLL_INTERVAL,
    label: str = "poll interval",
) -> float:
    """Parse a positive duration in seconds, falling back to ``default``."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    try:
        interval = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r, using default of %s seconds", label, raw, default)
        return default
    if not math.isfinite(interval) or interval <= 0:
        logger.warning("%s must be positive, got %r; using %s seconds", label.capitalize(), raw, default)
        return default
    return interval


def parse_priority(raw: Optional[str | int], default: int = DEFAULT_PRIORITY) -> int:
    """Parse a non-negative notification priority, falling back to ``default``."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    try:
        priority = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid notification priority %r, using %s", raw, default)
        return default
    if priority < 0:
        logger.warning("Notification priority must be non-negative, got %r; using %s", raw, default)
        return default
    return priority


def parse_identifiers(raw: Optional[str | Iterable[str]]) -> List[str]:
    """Split comma-separated SKUs into an ordered, deduplicated list.

    Accepts one string or an iterable of strings; each element may itself hold
    several comma-separated SKUs.
    """
    if raw is None:
        return []
    values = [raw] if isinstance(raw, str) else raw
    parts = [part for value in values for part in str(value).split(",")]
    identifiers: List[str] = []
    for part in parts:
        sku = part.strip()
        if any(char in sku for char in "()"):
            logger.warning("Ignoring SKU %r: parentheses are not allowed", sku)
            continue
        if sku and sku not in identifiers:
            identifiers.append(sku)
    return identifiers


class Config:
    """Configuration values sourced from the environment."""

    BEST_BUY_KEY: Optional[str] = os.getenv("BEST_BUY_KEY")
    BEST_BUY_BASE_URL: str = os.getenv("BEST_BUY_BASE_URL", "https://api.bestbuy.com/v1")
    SKUS: List[str] = parse_identifiers(os.getenv("SKUS"))
    REPEAT: bool = parse_bool(os.getenv("REPEAT"), False)
    POLL_INTERVAL: float = parse_interval(os.getenv("POLL_INTERVAL"))
    NOTIFICATIONS_ENABLED: bool = parse_bool(os.getenv("NOTIFICATIONS_ENABLED"), True)
    NOTIFICATION_PRIORITY: int = parse_priority(os.getenv("NOTIFICATION_PRIORITY"))
    GOTIFY_URL: Optional[str] = os.getenv("GOTIFY_URL")
    GOTIFY_TOKEN: Optional[str] = os.getenv("GOTIFY_TOKEN")
    REQUEST_TIMEOUT: float = parse_interval(
        os.getenv("REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT, label="request timeout"
    )
    HEARTBEAT_FILE: Optional[str] = os.getenv("HEARTBEAT_FILE") or None

    @classmethod
    def validate(
        cls,
        identifiers: Optional[List[str]] = None,
        notifications_enabled: Optional[bool] = None,
        dry_run: bool = False,
    ) -> None:
        """Raise ``ConfigError`` listing every missing required value.

        ``identifiers`` and ``notifications_enabled`` take precedence over the
        environment values when given (command-line overrides).
        """
        skus = cls.SKUS if identifiers is None else identifiers
        notify = cls.NOTIFICATIONS_ENABLED if notifications_enabled is None else notifications_enabled
        missing: List[str] = []
        if not cls.BEST_BUY_KEY:
            missing.append("BEST_BUY_KEY")
        if not skus:
            missing.append("SKUS")
        if notify and not dry_run:
            if not cls.GOTIFY_URL:
                missing.append("GOTIFY_URL")
            if not cls.GOTIFY_TOKEN:
                missing.append("GOTIFY_TOKEN")
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set them in the environment or a .env file."
            )


HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "User-Agent": "bestbuy-stock-watcher/0.1 (+https://developer.bestbuy.com/)",
}
