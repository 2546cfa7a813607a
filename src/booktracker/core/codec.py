"""Convert between catalog lines and BookRecord values.

A catalog line has the form ``Title:Author:ISBN:Copies``. Fields are not
escaped, so a colon inside a title or author does not survive a round trip.
"""

from __future__ import annotations

import re

from .models import BookRecord, Failure, FailureKind
from .validator import FIELD_COUNT, FIELD_SEPARATOR, validate_isbn

_INT_RE = re.compile(r"[+-]?[0-9]+")

# copies is a signed 32-bit value; wider text never reaches int()
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
_INT_MAX_DIGITS = len(str(INT_MAX))


def _malformed(message: str, value: str) -> Failure:
    return Failure(FailureKind.MALFORMED_ENTRY, message, value=value)


def _parse_int(text: str) -> int | None:
    if not _INT_RE.fullmatch(text):
        return None
    if len(text.lstrip("+-").lstrip("0")) > _INT_MAX_DIGITS:
        return None
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def parse_line(line: str) -> BookRecord | Failure:
    """Parse one catalog line.

    Returns the record on success, otherwise a Failure describing the first
    rule the line broke. The ISBN failure from the validator is passed
    through unchanged.
    """
    parts = line.split(FIELD_SEPARATOR, FIELD_COUNT - 1)
    if len(parts) < FIELD_COUNT:
        return _malformed(
            f"Expected 4 fields (Title:Author:ISBN:Copies), found: {len(parts)}", line
        )

    title, author, isbn, copies_text = (p.strip() for p in parts)

    if not title:
        return _malformed("Title field is empty", line)
    if not author:
        return _malformed("Author field is empty", line)

    isbn_failure = validate_isbn(isbn)
    if isbn_failure is not None:
        return isbn_failure

    copies = _parse_int(copies_text)
    if copies is None:
        return _malformed(f'Copies field is not a valid integer: "{copies_text}"', line)
    if copies <= 0:
        return _malformed(f"Copies must be a positive integer, got: {copies}", line)

    return BookRecord(title=title, author=author, isbn=isbn, copies=copies)


def serialize(record: BookRecord) -> str:
    return FIELD_SEPARATOR.join(
        [record.title, record.author, record.isbn, str(record.copies)]
    )
