"""Database location settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "TRACKPLAN_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
DATABASE_FILENAME: Final[str] = "trackplan.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str

    @classmethod
    def for_sqlite_file(cls, path: Path) -> DatabaseConfig:
        return cls(uri=f"sqlite+pysqlite:///{path}")


def get_data_dir(*, ensure: bool = True) -> Path:
    """Return ``TRACKPLAN_DATA_DIR`` or the per-user data directory for trackplan."""

    env_dir = os.getenv(DATA_DIR_ENV)
    if env_dir:
        data_dir = Path(env_dir)
    else:
        xdg_home = os.getenv("XDG_DATA_HOME")
        data_dir = (Path(xdg_home) if xdg_home else Path.home() / ".local" / "share") / "trackplan"
    data_dir = data_dir.expanduser().resolve()
    if ensure:
        data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_database_config(*, data_dir: Path | None = None) -> DatabaseConfig:
    env_uri = os.getenv(DATABASE_URI_ENV)
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    base = data_dir.expanduser().resolve() if data_dir is not None else get_data_dir()
    return DatabaseConfig.for_sqlite_file(base / DATABASE_FILENAME)
