"""CI output reporting."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Protocol

from tokenrefresh.auth.claude.constants import OUTPUT_ENV_VAR


class StatusSink(Protocol):
    def write(self, key: str, value: str) -> None: ...


class FileOutputSink:
    """Append ``key=value`` lines to a CI-provided output file."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    def write(self, key: str, value: str) -> None:
        with open(self.path, "a", encoding="utf-8") as fp:
            fp.write(f"{key}={value}\n")


def sink_from_env(environ: Mapping[str, str] | None = None) -> FileOutputSink | None:
    environ = os.environ if environ is None else environ
    path = environ.get(OUTPUT_ENV_VAR)
    if not path:
        return None
    return FileOutputSink(path)
