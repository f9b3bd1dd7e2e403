"""Epoch-millisecond helpers for control-plane timestamps."""

import time
from datetime import datetime, timezone
from typing import Optional

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS


def now_ms() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def from_ms(timestamp: int) -> datetime:
    """Aware UTC datetime for an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)


def format_relative_time(timestamp: int, now: Optional[int] = None) -> str:
    """Short relative label: "just now", "5m ago", "3h ago", "2d ago", then a date."""
    if now is None:
        now = now_ms()
    elapsed = max(now - timestamp, 0)

    if elapsed < MINUTE_MS:
        return "just now"
    if elapsed < HOUR_MS:
        return f"{elapsed // MINUTE_MS}m ago"
    if elapsed < DAY_MS:
        return f"{elapsed // HOUR_MS}h ago"
    if elapsed < 7 * DAY_MS:
        return f"{elapsed // DAY_MS}d ago"

    stamp = from_ms(timestamp)
    if stamp.year == from_ms(now).year:
        return f"{stamp:%b} {stamp.day}"
    return f"{stamp:%b} {stamp.day}, {stamp.year}"
