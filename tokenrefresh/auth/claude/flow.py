"""Claude OAuth pre-flight refresh."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from tokenrefresh.auth.claude.client import exchange_refresh_token
from tokenrefresh.auth.claude.constants import OUTPUT_KEY, REFRESH_BUFFER_MS
from tokenrefresh.auth.claude.errors import CredentialError
from tokenrefresh.auth.claude.expiry import (
    format_timestamp,
    is_expired,
    minutes_remaining,
    now_ms,
)
from tokenrefresh.auth.claude.models import NewTokenPair, Outcome
from tokenrefresh.auth.claude.reporting import StatusSink
from tokenrefresh.auth.claude.storage import load_credentials, save_credentials

logger = logging.getLogger(__name__)


def refresh_if_needed(
    path: str | os.PathLike[str],
    now: int | None = None,
    *,
    exchange: Callable[[str], NewTokenPair] = exchange_refresh_token,
    sink: StatusSink | None = None,
    on_status: Callable[[str], None] | None = None,
    buffer_ms: int = REFRESH_BUFFER_MS,
) -> Outcome:
    """Load credentials, refresh them if they are about to expire, and persist.

    Every step runs at most once. Failures come back as ``Outcome.failed``;
    the file is only written after a successful exchange.
    """
    path = Path(path)
    now = now_ms() if now is None else now

    def _status(message: str) -> None:
        if on_status:
            on_status(message)
        else:
            logger.debug(message)

    def _fail(error: CredentialError) -> Outcome:
        _status(f"✗ {error}")
        return Outcome.failed(error)

    _status(f"Checking OAuth credentials at: {path}")
    try:
        record = load_credentials(path)
    except CredentialError as exc:
        return _fail(exc)

    _status(f"Current token expires at: {format_timestamp(record.expires_at)}")
    if not is_expired(record.expires_at, now, buffer_ms):
        _status(f"✓ Token is still valid (expires in {minutes_remaining(record.expires_at, now)} minutes)")
        return Outcome.valid(record)

    _status("Token expired or expiring soon, refreshing...")
    try:
        pair = exchange(record.refresh_token)
    except CredentialError as exc:
        return _fail(exc)

    refreshed = record.with_tokens(pair)
    try:
        save_credentials(path, refreshed)
    except CredentialError as exc:
        return _fail(exc)

    _status(f"✓ Token refreshed successfully! New expiry: {format_timestamp(refreshed.expires_at)}")

    if sink is not None:
        try:
            sink.write(OUTPUT_KEY, "true")
        except OSError as exc:
            logger.warning("Could not write refresh status to CI output: %s", exc)

    return Outcome.refreshed_with(refreshed)
