"""Command-line entry point: ``booktracker <catalog.txt> <operation>``."""

from __future__ import annotations

import argparse
from pathlib import Path

import structlog

from .config import Settings, load_settings
from .core.errorlog import ErrorLog, error_log_path
from .core.models import BookRecord, Failure, FailureKind
from .core.store import ensure_catalog_file
from .core.tracker import BookTracker, OperationKind, RunSummary
from .logs import configure_logging

log = structlog.get_logger()

COL_TITLE = 30
COL_AUTHOR = 20
COL_ISBN = 15
COL_COPIES = 5


def format_header() -> str:
    header = (
        f"{'Title':<{COL_TITLE}} {'Author':<{COL_AUTHOR}} "
        f"{'ISBN':<{COL_ISBN}} {'Copies':>{COL_COPIES}}"
    )
    return header + "\n" + "-" * (COL_TITLE + COL_AUTHOR + COL_ISBN + COL_COPIES + 3)


def format_row(book: BookRecord) -> str:
    return (
        f"{book.title:<{COL_TITLE}} {book.author:<{COL_AUTHOR}} "
        f"{book.isbn:<{COL_ISBN}} {book.copies:>{COL_COPIES}d}"
    )


def format_statistics(summary: RunSummary) -> str:
    return "\n".join(
        [
            "",
            "--- Statistics ---",
            f"Valid records processed : {summary.records_processed}",
            f"Search results          : {summary.search_results}",
            f"Books added             : {summary.books_added}",
            f"Errors encountered      : {summary.errors}",
            "",
            "Thank you for using the Library Book Tracker.",
        ]
    )


def render(summary: RunSummary) -> str:
    """Render the operation outcome as the console table output."""
    lines: list[str] = []
    for failure in summary.failures:
        if failure.kind is FailureKind.IO_ERROR:
            lines.append(f"I/O Error: {failure.message}")
        elif failure.kind is FailureKind.UNEXPECTED:
            lines.append(f"Unexpected error: {failure.message}")

    if summary.kind is OperationKind.TITLE_SEARCH:
        lines.append(f'\n Title Search: "{summary.operation}"')
        lines.append(format_header())
        lines.extend(format_row(b) for b in summary.matches)
        lines.append(f"Found {len(summary.matches)} result.")
    elif summary.kind is OperationKind.ISBN_SEARCH:
        lines.append(f"\n ISBN Search: {summary.operation}")
        if summary.operation_failure is not None:
            lines.append(f"Error: {summary.operation_failure.message}")
        else:
            lines.append(format_header())
            if summary.matches:
                lines.extend(format_row(b) for b in summary.matches)
            else:
                lines.append(f"No book found with ISBN: {summary.operation}")
    elif summary.kind is OperationKind.ADD:
        lines.append("\n Add Book ")
        if summary.added is not None:
            lines.append(format_header())
            lines.append(format_row(summary.added))
            lines.append("Book added successfully to the catalog.")
        elif summary.operation_failure is not None:
            lines.append(f"Error adding book: {summary.operation_failure.message}")

    lines.extend(f"Warning: {w}" for w in summary.warnings)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="booktracker",
        description="Search or extend a colon-delimited book catalog",
    )
    parser.add_argument("catalog", nargs="?", help="Catalog file (Title:Author:ISBN:Copies per line)")
    parser.add_argument(
        "operation",
        nargs="?",
        help="13-digit ISBN to look up, a Title:Author:ISBN:Copies record to add, "
        "or a title keyword",
    )
    parser.add_argument("--log-level", default=None, help="none, error, warning, info or debug")
    return parser


def run(catalog: str | None, operation: str | None, settings: Settings) -> RunSummary:
    """Validate the invocation, then hand off to BookTracker."""
    if catalog is None or operation is None:
        summary = RunSummary(operation=operation or "")
        summary.record_failure(
            Failure(
                FailureKind.INSUFFICIENT_INPUT,
                "At least 2 arguments required: <catalogFile.txt> <operation>",
            )
        )
        return summary

    if not settings.has_catalog_extension(catalog):
        summary = RunSummary(operation=operation)
        summary.record_failure(
            Failure(
                FailureKind.INVALID_FILE_NAME,
                f"Catalog file must end with {', '.join(settings.catalog_extensions)}, "
                f"got: {catalog}",
                value=catalog,
            )
        )
        return summary

    path = Path(catalog)
    try:
        if ensure_catalog_file(path):
            print(f"Info: Created new catalog file: {catalog}")
    except OSError as e:
        summary = RunSummary(operation=operation)
        summary.record_failure(Failure(FailureKind.IO_ERROR, f"Could not create catalog: {e}"))
        return summary

    error_log = ErrorLog(error_log_path(path, settings.error_log_name))
    return BookTracker(path, error_log=error_log).run(operation)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level)

    summary = run(args.catalog, args.operation, settings)
    for failure in summary.failures:
        if failure.kind in (FailureKind.INSUFFICIENT_INPUT, FailureKind.INVALID_FILE_NAME):
            log.warning("invalid_invocation", kind=failure.kind.value)
            print(f"Error: {failure.message}")

    output = render(summary)
    if output:
        print(output)
    print(format_statistics(summary))
    return 0 if summary.errors == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
