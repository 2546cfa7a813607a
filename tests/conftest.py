from datetime import datetime
from pathlib import Path

import pytest

from booktracker.core.errorlog import ErrorLog

FIXED_TIME = datetime(2024, 3, 9, 14, 5, 7)


@pytest.fixture
def write_catalog(tmp_path):
    def _write(lines, name="catalog.txt"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def error_log(tmp_path) -> ErrorLog:
    return ErrorLog(tmp_path / "errors.log", clock=lambda: FIXED_TIME)


@pytest.fixture
def read_lines():
    def _read(path: Path) -> list[str]:
        if not path.exists():
            return []
        return path.read_text(encoding="utf-8").splitlines()

    return _read
