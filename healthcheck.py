#!/usr/bin/env python3
"""Health check script for Best Buy Stock Watcher container."""

import os
import sys
import time
from typing import Optional

from dotenv import load_dotenv


def check_last_fetch_time(heartbeat_file: Optional[str], max_age: int) -> bool:
    """Check if availability was fetched successfully within ``max_age`` seconds."""
    # Without a heartbeat file (disabled or first run) the watcher counts as healthy
    if not heartbeat_file or not os.path.exists(heartbeat_file):
        print("No previous fetch timestamp found, considering healthy", file=sys.stderr)
        return True

    try:
        with open(heartbeat_file, 'r') as f:
            last_fetch_time = float(f.read().strip())
    except (OSError, ValueError) as e:
        print(f"Error checking last fetch time: {e}", file=sys.stderr)
        return False

    time_diff = time.time() - last_fetch_time
    if time_diff > max_age:
        print(f"❌ Last availability fetch was {time_diff:.0f} seconds ago (> {max_age} seconds)", file=sys.stderr)
        return False

    print(f"✅ Last availability fetch was {time_diff:.0f} seconds ago", file=sys.stderr)
    return True


def main() -> None:
    """Run health checks."""
    load_dotenv()
    try:
        max_age = int(os.getenv("HEALTHCHECK_INTERVAL", "900"))
    except ValueError:
        max_age = 900

    if check_last_fetch_time(os.getenv("HEARTBEAT_FILE"), max_age):
        print("✅ Health check passed")
        sys.exit(0)
    print("❌ Health check failed: last_fetch_time", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
