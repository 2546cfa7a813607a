import pytest

from booktracker.core.models import FailureKind
from booktracker.core.validator import is_isbn, is_record, validate_isbn


@pytest.mark.parametrize("isbn", ["9780000000001", "0000000000000", "1234567890123"])
def test_valid_isbn(isbn):
    assert validate_isbn(isbn) is None
    assert is_isbn(isbn)


@pytest.mark.parametrize(
    "isbn",
    [
        "",
        "12",
        "978000000000",
        "97800000000012",
        "978000000000X",
        "978-0-00-000000",
        " 9780000000001",
        # Arabic-Indic digits are decimal but not ASCII
        "١٢٣٤٥٦٧٨٩٠١٢٣",
    ],
)
def test_invalid_isbn(isbn):
    failure = validate_isbn(isbn)
    assert failure is not None
    assert failure.kind is FailureKind.INVALID_ISBN
    assert failure.value == isbn
    assert not is_isbn(isbn)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Title:Author:9780000000001:1", True),
        (":::", True),
        ("a:b:c", False),
        ("a:b:c:d:e", False),
        ("just a keyword", False),
    ],
)
def test_is_record(text, expected):
    assert is_record(text) is expected
