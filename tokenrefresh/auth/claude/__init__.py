"""Claude OAuth credential refresh module."""

from tokenrefresh.auth.claude.client import exchange_refresh_token
from tokenrefresh.auth.claude.errors import (
    CredentialError,
    CredentialsNotFoundError,
    CredentialsParseError,
    LoadError,
    PersistError,
    RefreshError,
)
from tokenrefresh.auth.claude.expiry import is_expired
from tokenrefresh.auth.claude.flow import refresh_if_needed
from tokenrefresh.auth.claude.models import CredentialRecord, NewTokenPair, Outcome, OutcomeStatus
from tokenrefresh.auth.claude.reporting import FileOutputSink, StatusSink, sink_from_env
from tokenrefresh.auth.claude.storage import load_credentials, save_credentials

__all__ = [
    "CredentialError",
    "CredentialRecord",
    "CredentialsNotFoundError",
    "CredentialsParseError",
    "FileOutputSink",
    "LoadError",
    "NewTokenPair",
    "Outcome",
    "OutcomeStatus",
    "PersistError",
    "RefreshError",
    "StatusSink",
    "exchange_refresh_token",
    "is_expired",
    "load_credentials",
    "refresh_if_needed",
    "save_credentials",
    "sink_from_env",
]
