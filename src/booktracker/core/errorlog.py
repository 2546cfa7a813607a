"""Append-only side log of rejected input."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import structlog

from .models import Failure

log = structlog.get_logger()

DEFAULT_LOG_NAME = "errors.log"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def error_log_path(catalog_path: Path, name: str = DEFAULT_LOG_NAME) -> Path:
    """Place the log next to the catalog, or in the working directory."""
    parent = catalog_path.parent
    if str(parent) in ("", "."):
        return Path(name)
    return parent / name


def format_entry(timestamp: datetime, offending: str, failure: Failure) -> str:
    return (
        f"[{timestamp.strftime(TIMESTAMP_FORMAT)}] INVALID LINE: "
        f'"{offending}" - {failure.kind.value}: {failure.message}'
    )


class ErrorLog:
    """Write one timestamped line per failure.

    A failed write never raises; the problem is kept in ``warnings`` so the
    caller can report it without losing the original error.
    """

    def __init__(self, path: Path, clock: Callable[[], datetime] = datetime.now) -> None:
        self.path = path
        self.clock = clock
        self.warnings: list[str] = []
        self.entries_written = 0

    def log(self, offending: str, failure: Failure) -> bool:
        entry = format_entry(self.clock(), offending, failure)
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(entry + "\n")
        except OSError as e:
            warning = f"Could not write to error log: {e}"
            self.warnings.append(warning)
            log.warning("error_log_write_failed", path=str(self.path), error=str(e))
            return False
        self.entries_written += 1
        log.debug("error_logged", kind=failure.kind.value, path=str(self.path))
        return True
