"""Credential file storage helpers."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import IO, Any, Iterator

from tokenrefresh.auth.claude.constants import CREDENTIALS_KEY
from tokenrefresh.auth.claude.errors import (
    CredentialsNotFoundError,
    CredentialsParseError,
    PersistError,
)
from tokenrefresh.auth.claude.models import CredentialRecord

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CredentialsParseError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise CredentialsParseError(path, "top-level JSON value is not an object")
    return data


def load_credentials(path: str | os.PathLike[str]) -> CredentialRecord:
    """Load the Claude OAuth entry from a credentials file."""
    path = Path(path)
    if not path.is_file():
        raise CredentialsNotFoundError(path)

    try:
        document = _read_document(path)
    except OSError as exc:
        raise CredentialsParseError(path, str(exc)) from exc

    entry = document.get(CREDENTIALS_KEY)
    if not isinstance(entry, dict):
        raise CredentialsParseError(path, f"missing '{CREDENTIALS_KEY}' entry")
    try:
        return CredentialRecord.from_dict(entry)
    except ValueError as exc:
        raise CredentialsParseError(path, str(exc)) from exc


@contextlib.contextmanager
def _atomic_write(path: Path, mode: int) -> Iterator[IO[str]]:
    """Yield a temp file beside ``path``; rename it over ``path`` on clean exit."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            yield fp
            fp.flush()
            os.fsync(fp.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            tmp_path.unlink()
        raise


def save_credentials(path: str | os.PathLike[str], record: CredentialRecord) -> None:
    """Rewrite the credentials file with ``record``, keeping sibling fields."""
    # Write through symlinks so the link target gets the new pair.
    path = Path(os.path.realpath(path))
    try:
        if path.exists():
            document = _read_document(path)
            mode = stat.S_IMODE(path.stat().st_mode)
        else:
            document = {}
            mode = 0o600
        document[CREDENTIALS_KEY] = record.to_dict()
        payload = json.dumps(document, ensure_ascii=False, indent=2)
        with _atomic_write(path, mode) as fp:
            fp.write(payload)
    except (OSError, CredentialsParseError) as exc:
        raise PersistError(path, exc) from exc
    logger.debug("Wrote credentials to %s", path)
