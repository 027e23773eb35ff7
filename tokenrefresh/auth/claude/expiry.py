"""Token expiry policy."""

from __future__ import annotations

import time
from datetime import datetime

from tokenrefresh.auth.claude.constants import REFRESH_BUFFER_MS


def is_expired(expires_at: int, now: int, buffer_ms: int = REFRESH_BUFFER_MS) -> bool:
    """Return True once ``now`` is within ``buffer_ms`` of ``expires_at`` (all in ms)."""
    return now >= expires_at - buffer_ms


def now_ms() -> int:
    return int(time.time() * 1000)


def minutes_remaining(expires_at: int, now: int) -> int:
    return round((expires_at - now) / 1000 / 60)


def format_timestamp(timestamp_ms: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, OverflowError, OSError):
        return f"{timestamp_ms} ms"
