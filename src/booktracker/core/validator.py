"""Field-level validation rules."""

from __future__ import annotations

import re

from .models import Failure, FailureKind

# ASCII only; \d would also accept other Unicode decimal digits.
_ISBN_RE = re.compile(r"[0-9]{13}")

FIELD_SEPARATOR = ":"
FIELD_COUNT = 4


def is_isbn(text: str) -> bool:
    return _ISBN_RE.fullmatch(text) is not None


def validate_isbn(text: str) -> Failure | None:
    """Return an InvalidISBN failure unless text is exactly 13 ASCII digits."""
    if is_isbn(text):
        return None
    return Failure(
        FailureKind.INVALID_ISBN,
        f'ISBN must be exactly 13 digits, got: "{text}"',
        value=text,
    )


def is_record(text: str) -> bool:
    """True if text has exactly four colon-separated fields, empty ones included."""
    return len(text.split(FIELD_SEPARATOR)) == FIELD_COUNT
