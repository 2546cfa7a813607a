"""Runtime settings read from the environment (and a .env file, if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .core.errorlog import DEFAULT_LOG_NAME


def _split_extensions(raw: str) -> tuple[str, ...]:
    exts = []
    for item in raw.split(","):
        item = item.strip().lower()
        if not item:
            continue
        exts.append(item if item.startswith(".") else f".{item}")
    return tuple(exts) or (".txt",)


@dataclass
class Settings:
    catalog_path: Path = Path("catalog.txt")
    error_log_name: str = DEFAULT_LOG_NAME
    catalog_extensions: tuple[str, ...] = field(default_factory=lambda: (".txt",))
    log_level: str = "warning"
    port: int = 8000
    env: str = "dev"

    def has_catalog_extension(self, path: str | Path) -> bool:
        return str(path).lower().endswith(self.catalog_extensions)


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        catalog_path=Path(os.environ.get("CATALOG_PATH", "catalog.txt")),
        error_log_name=os.environ.get("ERROR_LOG_NAME", DEFAULT_LOG_NAME),
        catalog_extensions=_split_extensions(os.environ.get("CATALOG_EXTENSIONS", ".txt")),
        log_level=os.environ.get("LOG_LEVEL", "warning"),
        port=int(os.environ.get("PORT", "8000")),
        env=os.environ.get("ENV", "dev"),
    )
