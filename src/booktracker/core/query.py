"""Title and ISBN lookups over a loaded catalog."""

from __future__ import annotations

import structlog

from .models import BookRecord, Failure, FailureKind

log = structlog.get_logger()


def search_by_title(records: list[BookRecord], keyword: str) -> list[BookRecord]:
    """Case-insensitive substring match on title, in catalog order."""
    needle = keyword.lower()
    matches = [b for b in records if needle in b.title.lower()]
    log.debug("title_search", keyword=keyword, matches=len(matches))
    return matches


def search_by_isbn(records: list[BookRecord], isbn: str) -> BookRecord | Failure | None:
    """Find the single record with this exact ISBN.

    Returns None when nothing matches and a DuplicateISBN failure when more
    than one record shares the ISBN.
    """
    matches = [b for b in records if b.isbn == isbn]
    log.debug("isbn_search", isbn=isbn, matches=len(matches))
    if len(matches) > 1:
        return Failure(
            FailureKind.DUPLICATE_ISBN,
            f"Found {len(matches)} books with ISBN {isbn}",
            value=isbn,
            count=len(matches),
        )
    return matches[0] if matches else None
