"""Authentication modules."""

from tokenrefresh.auth.claude import (
    CredentialRecord,
    Outcome,
    refresh_if_needed,
)

__all__ = [
    "CredentialRecord",
    "Outcome",
    "refresh_if_needed",
]
