"""Run one catalog operation end to end.

The load phase always finishes before the operation phase starts; both run
on the calling thread. Everything that happens is collected into a
RunSummary, which callers render once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

from .codec import parse_line
from .errorlog import ErrorLog, error_log_path
from .models import BookRecord, Failure, FailureKind
from .query import search_by_isbn, search_by_title
from .store import add_record, load_catalog, persist_catalog
from .validator import is_isbn, is_record

log = structlog.get_logger()


_FATAL_KINDS = (FailureKind.IO_ERROR, FailureKind.UNEXPECTED)


class OperationKind(Enum):
    ISBN_SEARCH = "isbn_search"
    ADD = "add"
    TITLE_SEARCH = "title_search"


def classify_operation(text: str) -> OperationKind:
    """ISBN first, then a four-field record, else a title keyword."""
    if is_isbn(text):
        return OperationKind.ISBN_SEARCH
    if is_record(text):
        return OperationKind.ADD
    return OperationKind.TITLE_SEARCH


@dataclass
class RunSummary:
    operation: str = ""
    kind: OperationKind | None = None
    records_processed: int = 0
    search_results: int = 0
    books_added: int = 0
    errors: int = 0
    matches: list[BookRecord] = field(default_factory=list)
    added: BookRecord | None = None
    operation_failure: Failure | None = None
    failures: list[Failure] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def record_failure(self, failure: Failure) -> None:
        self.failures.append(failure)
        self.errors += 1

    @property
    def succeeded(self) -> bool:
        """True when the operation itself completed; load-time rejects don't count."""
        if self.kind is None or self.operation_failure is not None:
            return False
        return not any(f.kind in _FATAL_KINDS for f in self.failures)

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "succeeded": self.succeeded,
            "kind": self.kind.value if self.kind else None,
            "summary": {
                "records_processed": self.records_processed,
                "search_results": self.search_results,
                "books_added": self.books_added,
                "errors": self.errors,
            },
            "matches": [b.to_dict() for b in self.matches],
            "added": self.added.to_dict() if self.added else None,
            "operation_failure": (
                self.operation_failure.to_dict() if self.operation_failure else None
            ),
            "failures": [f.to_dict() for f in self.failures],
            "warnings": list(self.warnings),
        }


class BookTracker:
    """Load a catalog file and apply a single operation to it."""

    def __init__(self, catalog_path: Path, error_log: ErrorLog | None = None) -> None:
        self.catalog_path = catalog_path
        self.error_log = error_log or ErrorLog(error_log_path(catalog_path))

    def load(self, summary: RunSummary) -> list[BookRecord]:
        result = load_catalog(self.catalog_path)
        for line, failure in result.failures:
            self.error_log.log(line, failure)
            summary.record_failure(failure)
        summary.records_processed = len(result.records)
        return result.records

    def execute(self, operation: str, records: list[BookRecord], summary: RunSummary) -> None:
        kind = classify_operation(operation)
        summary.kind = kind
        log.info("operation_started", kind=kind.value, catalog=str(self.catalog_path))

        if kind is OperationKind.ISBN_SEARCH:
            self._isbn_search(operation, records, summary)
        elif kind is OperationKind.ADD:
            self._add(operation, records, summary)
        else:
            summary.matches = search_by_title(records, operation)
            summary.search_results = len(summary.matches)

    def _isbn_search(self, isbn: str, records: list[BookRecord], summary: RunSummary) -> None:
        found = search_by_isbn(records, isbn)
        if isinstance(found, Failure):
            self.error_log.log(isbn, found)
            summary.operation_failure = found
            summary.record_failure(found)
            summary.search_results = 0
            return
        summary.matches = [found] if found else []
        summary.search_results = len(summary.matches)

    def _add(self, line: str, records: list[BookRecord], summary: RunSummary) -> None:
        parsed = parse_line(line)
        if isinstance(parsed, Failure):
            self.error_log.log(line, parsed)
            summary.operation_failure = parsed
            summary.record_failure(parsed)
            return
        updated = add_record(records, parsed)
        persist_catalog(self.catalog_path, updated)
        summary.added = parsed
        summary.books_added = 1
        log.info("book_added", isbn=parsed.isbn, title=parsed.title, total=len(updated))

    def run(self, operation: str) -> RunSummary:
        """Load the catalog, then run the operation. Always returns a summary."""
        summary = RunSummary(operation=operation)
        records: list[BookRecord] | None = None
        try:
            records = self.load(summary)
        except (OSError, UnicodeDecodeError) as e:
            log.error("catalog_read_failed", path=str(self.catalog_path), error=str(e))
            summary.record_failure(
                Failure(FailureKind.IO_ERROR, f"Could not read catalog: {e}")
            )
        except Exception as e:
            log.exception("load_failed", path=str(self.catalog_path))
            summary.record_failure(Failure(FailureKind.UNEXPECTED, str(e)))

        # An unreadable catalog must not be rewritten by a following add.
        if records is not None:
            try:
                self.execute(operation, records, summary)
            except OSError as e:
                log.error("catalog_write_failed", path=str(self.catalog_path), error=str(e))
                summary.record_failure(
                    Failure(FailureKind.IO_ERROR, f"Could not write catalog: {e}")
                )
            except Exception as e:
                log.exception("operation_failed", operation=operation)
                summary.record_failure(Failure(FailureKind.UNEXPECTED, str(e)))

        summary.warnings.extend(self.error_log.warnings)
        log.info(
            "run_finished",
            records=summary.records_processed,
            results=summary.search_results,
            added=summary.books_added,
            errors=summary.errors,
        )
        return summary
