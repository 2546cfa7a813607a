"""Data models for catalog records and failures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class BookRecord:
    title: str
    author: str
    isbn: str
    copies: int

    def to_dict(self) -> dict[str, str | int]:
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "copies": self.copies,
        }


class FailureKind(Enum):
    INSUFFICIENT_INPUT = "InsufficientInput"
    INVALID_FILE_NAME = "InvalidFileName"
    MALFORMED_ENTRY = "MalformedEntry"
    INVALID_ISBN = "InvalidISBN"
    DUPLICATE_ISBN = "DuplicateISBN"
    IO_ERROR = "IOError"
    UNEXPECTED = "UnexpectedError"


@dataclass(frozen=True)
class Failure:
    """An expected, non-exceptional failure returned by parse/search calls."""

    kind: FailureKind
    message: str
    value: str = ""
    count: int = 0

    def to_dict(self) -> dict[str, str | int]:
        data: dict[str, str | int] = {"kind": self.kind.value, "message": self.message}
        if self.value:
            data["value"] = self.value
        if self.count:
            data["count"] = self.count
        return data


@dataclass
class LoadResult:
    records: list[BookRecord] = field(default_factory=list)
    failures: list[tuple[str, Failure]] = field(default_factory=list)
