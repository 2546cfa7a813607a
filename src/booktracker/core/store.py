"""Load, mutate and persist the flat-file catalog."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

import structlog

from .codec import parse_line, serialize
from .models import BookRecord, Failure, LoadResult

log = structlog.get_logger()


def ensure_catalog_file(path: Path) -> bool:
    """Create the catalog file (and missing parents) if absent.

    Returns True when a new empty file was created.
    """
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    log.info("catalog_created", path=str(path))
    return True


def load_catalog(path: Path) -> LoadResult:
    """Read every line of the catalog, keeping valid records in file order.

    Blank lines are skipped. Lines that fail to parse are collected in
    ``failures`` with their trimmed text; they never stop the load.
    OSError and UnicodeDecodeError propagate to the caller.
    """
    result = LoadResult()
    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line:
                continue
            parsed = parse_line(line)
            if isinstance(parsed, Failure):
                log.debug("line_rejected", line=line, kind=parsed.kind.value)
                result.failures.append((line, parsed))
            else:
                result.records.append(parsed)
    log.info(
        "catalog_loaded",
        path=str(path),
        records=len(result.records),
        rejected=len(result.failures),
    )
    return result


def add_record(records: list[BookRecord], record: BookRecord) -> list[BookRecord]:
    """Return a new catalog with record added, sorted by lowercase title.

    The sort is stable, so records with equal titles keep their order.
    """
    return sorted([*records, record], key=lambda b: b.title.lower())


def persist_catalog(path: Path, records: list[BookRecord]) -> None:
    """Overwrite the catalog file with one line per record.

    Content goes to a temporary sibling first and is then moved into place,
    so readers never see a half-written catalog. A symlinked catalog is
    updated through the link.
    """
    target = path.resolve()
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for record in records:
                f.write(serialize(record) + "\n")
            f.flush()
            os.fsync(f.fileno())
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    log.info("catalog_written", path=str(path), records=len(records))
