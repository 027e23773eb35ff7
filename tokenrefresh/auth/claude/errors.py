"""Claude OAuth error types."""

from __future__ import annotations

from pathlib import Path


class CredentialError(Exception):
    """Base class for every credential lifecycle failure."""


class LoadError(CredentialError):
    """The credential file could not be loaded."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class CredentialsNotFoundError(LoadError):
    def __init__(self, path: Path):
        super().__init__(path, f"Credentials file not found: {path}")


class CredentialsParseError(LoadError):
    def __init__(self, path: Path, detail: str):
        super().__init__(path, f"Error parsing credentials file {path}: {detail}")
        self.detail = detail


class RefreshError(CredentialError):
    """The token endpoint did not hand back a new token pair.

    Either ``status_code`` and ``body`` are set (the server answered) or
    ``transport`` is true and ``cause`` holds the network error.
    """

    def __init__(
        self,
        *,
        status_code: int | None = None,
        body: str | None = None,
        transport: bool = False,
        cause: BaseException | None = None,
        reason: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.transport = transport
        self.cause = cause
        self.reason = reason
        super().__init__(self._describe())

    @property
    def kind(self) -> str:
        if self.transport:
            return "transport"
        if self.reason:
            return self.reason
        return "http_status"

    def _describe(self) -> str:
        if self.transport:
            return f"Error making refresh request: {self.cause}"
        if self.reason == "malformed":
            return f"Token refresh returned an unusable response: {self.status_code} - {self.body}"
        return f"Token refresh failed: {self.status_code} - {self.body}"


class PersistError(CredentialError):
    """Writing the refreshed credentials back to disk failed."""

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(f"Error updating credentials file {path}: {cause}")
        self.path = path
        self.cause = cause
