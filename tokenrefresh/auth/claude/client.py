"""Refresh-token exchange against the Claude OAuth token endpoint."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from tokenrefresh.auth.claude.constants import (
    CLIENT_ID,
    DEFAULT_SCOPES,
    DEFAULT_TIMEOUT_SEC,
    TOKEN_URL,
)
from tokenrefresh.auth.claude.errors import RefreshError
from tokenrefresh.auth.claude.models import NewTokenPair

logger = logging.getLogger(__name__)


def _parse_token_payload(payload: Any) -> tuple[str, str, int, str | None]:
    if not isinstance(payload, dict):
        raise ValueError("response is not a JSON object")
    access = payload.get("access_token")
    refresh = payload.get("refresh_token")
    expires_in = payload.get("expires_in")
    scope = payload.get("scope")
    if not isinstance(access, str) or not access:
        raise ValueError("missing access_token")
    if not isinstance(refresh, str) or not refresh:
        raise ValueError("missing refresh_token")
    if isinstance(expires_in, bool) or not isinstance(expires_in, int):
        raise ValueError("missing expires_in")
    if scope is not None and not isinstance(scope, str):
        raise ValueError("scope is not a string")
    return access, refresh, expires_in, scope


def _post(client: httpx.Client, token_url: str, body: dict[str, str]) -> httpx.Response:
    try:
        return client.post(token_url, json=body, headers={"Content-Type": "application/json"})
    except httpx.RequestError as exc:
        raise RefreshError(transport=True, cause=exc) from exc


def exchange_refresh_token(
    refresh_token: str,
    *,
    client: httpx.Client | None = None,
    token_url: str = TOKEN_URL,
    client_id: str = CLIENT_ID,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    clock: Callable[[], float] = time.time,
) -> NewTokenPair:
    """Trade a refresh token for a new token pair.

    Sends exactly one request and never retries. Raises RefreshError for a
    non-2xx answer (body kept verbatim), an unusable 2xx body, or a network
    failure.
    """
    body = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "client_id": client_id,
    }
    if client is None:
        with httpx.Client(timeout=timeout) as own_client:
            response = _post(own_client, token_url, body)
    else:
        response = _post(client, token_url, body)

    if not response.is_success:
        raise RefreshError(status_code=response.status_code, body=response.text)

    try:
        access, refresh, expires_in, scope = _parse_token_payload(response.json())
    except ValueError as exc:
        logger.debug("Unusable token response: %s", exc)
        raise RefreshError(
            status_code=response.status_code,
            body=response.text,
            reason="malformed",
        ) from exc

    return NewTokenPair(
        access_token=access,
        refresh_token=refresh,
        expires_at=(int(clock()) + expires_in) * 1000,
        scopes=scope.split() if scope else list(DEFAULT_SCOPES),
        # Only max-tier accounts are refreshed through this client.
        is_max=True,
    )
