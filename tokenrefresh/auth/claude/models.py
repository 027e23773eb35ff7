"""Claude OAuth data models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from tokenrefresh.auth.claude.errors import CredentialError

_FIELD_NAMES = {
    "accessToken": "access_token",
    "refreshToken": "refresh_token",
    "expiresAt": "expires_at",
    "scopes": "scopes",
    "isMax": "is_max",
}


@dataclass
class NewTokenPair:
    """Token fields issued by a successful refresh."""

    access_token: str
    refresh_token: str
    expires_at: int
    scopes: list[str]
    is_max: bool


@dataclass
class CredentialRecord:
    """Claude OAuth credential entry as stored on disk."""

    access_token: str
    refresh_token: str
    expires_at: int
    scopes: list[str]
    is_max: bool
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CredentialRecord":
        """Build a record from the camelCase entry, raising ValueError on bad fields."""
        missing = [key for key in _FIELD_NAMES if key not in data]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")

        access = data["accessToken"]
        refresh = data["refreshToken"]
        if not isinstance(access, str) or not isinstance(refresh, str):
            raise ValueError("accessToken and refreshToken must be strings")

        expires = data["expiresAt"]
        if isinstance(expires, bool) or not isinstance(expires, (int, float)):
            raise ValueError("expiresAt must be an integer")
        if isinstance(expires, float):
            if not expires.is_integer():
                raise ValueError("expiresAt must be an integer")
            expires = int(expires)

        scopes = data["scopes"]
        if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
            raise ValueError("scopes must be a list of strings")

        is_max = data["isMax"]
        if not isinstance(is_max, bool):
            raise ValueError("isMax must be a boolean")

        return cls(
            access_token=access,
            refresh_token=refresh,
            expires_at=expires,
            scopes=list(scopes),
            is_max=is_max,
            extra={k: v for k, v in data.items() if k not in _FIELD_NAMES},
        )

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.extra)
        data.update(
            {
                "accessToken": self.access_token,
                "refreshToken": self.refresh_token,
                "expiresAt": self.expires_at,
                "scopes": list(self.scopes),
                "isMax": self.is_max,
            }
        )
        return data

    def with_tokens(self, pair: NewTokenPair) -> "CredentialRecord":
        # The old refresh token is dead once a new one is issued, so every
        # OAuth field moves together.
        return replace(
            self,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            expires_at=pair.expires_at,
            scopes=list(pair.scopes),
            is_max=pair.is_max,
            extra=dict(self.extra),
        )


class OutcomeStatus(str, Enum):
    VALID = "valid"
    REFRESHED = "refreshed"
    FAILED = "failed"


@dataclass
class Outcome:
    """Result of one refresh run."""

    status: OutcomeStatus
    record: CredentialRecord | None = None
    error: CredentialError | None = None

    @classmethod
    def valid(cls, record: CredentialRecord) -> "Outcome":
        return cls(OutcomeStatus.VALID, record=record)

    @classmethod
    def refreshed_with(cls, record: CredentialRecord) -> "Outcome":
        return cls(OutcomeStatus.REFRESHED, record=record)

    @classmethod
    def failed(cls, error: CredentialError) -> "Outcome":
        return cls(OutcomeStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.FAILED

    @property
    def refreshed(self) -> bool:
        return self.status is OutcomeStatus.REFRESHED
