from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from trackplan.config import (
    ConfigurationError,
    get_data_dir,
    get_database_config,
    get_log_level,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_data_dir_honours_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("TRACKPLAN_DATA_DIR", str(tmp_path / "data"))

    data_dir = get_data_dir()

    assert data_dir == (tmp_path / "data").resolve()
    assert data_dir.is_dir()


def test_data_dir_defaults_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("TRACKPLAN_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert get_data_dir(ensure=False) == (tmp_path / "trackplan").resolve()
    assert not (tmp_path / "trackplan").exists()


def test_database_uri_env_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://localhost/trackplan")

    assert get_database_config().uri == "postgresql+psycopg://localhost/trackplan"


def test_database_uri_falls_back_to_sqlite_file(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)

    uri = get_database_config(data_dir=tmp_path).uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'trackplan.db'}"


def test_log_level_defaults_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRACKPLAN_LOG_LEVEL", raising=False)

    assert get_log_level() == logging.INFO
    assert get_log_level(default=logging.WARNING) == logging.WARNING


def test_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKPLAN_LOG_LEVEL", " debug ")

    assert get_log_level() == logging.DEBUG


def test_invalid_log_level_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKPLAN_LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError, match="TRACKPLAN_LOG_LEVEL"):
        get_log_level()
