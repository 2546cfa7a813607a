from datetime import datetime
from pathlib import Path

from booktracker.core.errorlog import ErrorLog, error_log_path
from booktracker.core.models import Failure, FailureKind

FIXED_TIME = datetime(2024, 3, 9, 14, 5, 7)


def test_log_path_next_to_catalog(tmp_path):
    assert error_log_path(tmp_path / "data" / "catalog.txt") == tmp_path / "data" / "errors.log"


def test_log_path_without_parent():
    assert error_log_path(Path("catalog.txt")) == Path("errors.log")


def test_log_path_custom_name(tmp_path):
    assert error_log_path(tmp_path / "catalog.txt", "rejects.log") == tmp_path / "rejects.log"


def test_entry_format(error_log, read_lines):
    failure = Failure(FailureKind.INVALID_ISBN, 'ISBN must be exactly 13 digits, got: "12"')

    assert error_log.log("Bad:Author:12:2", failure) is True
    error_log.log("x", Failure(FailureKind.MALFORMED_ENTRY, "Expected 4 fields"))

    assert read_lines(error_log.path) == [
        '[2024-03-09T14:05:07] INVALID LINE: "Bad:Author:12:2" - InvalidISBN: '
        'ISBN must be exactly 13 digits, got: "12"',
        '[2024-03-09T14:05:07] INVALID LINE: "x" - MalformedEntry: Expected 4 fields',
    ]
    assert error_log.entries_written == 2


def test_write_failure_becomes_warning(tmp_path):
    blocked = tmp_path / "errors.log"
    blocked.mkdir()
    error_log = ErrorLog(blocked, clock=lambda: FIXED_TIME)

    ok = error_log.log("line", Failure(FailureKind.MALFORMED_ENTRY, "bad"))

    assert ok is False
    assert len(error_log.warnings) == 1
    assert error_log.warnings[0].startswith("Could not write to error log:")
    assert error_log.entries_written == 0
