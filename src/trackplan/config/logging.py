"""Shared logging helpers for trackplan."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import ConfigurationError

LOG_LEVEL_ENV: Final[str] = "TRACKPLAN_LOG_LEVEL"


def get_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``TRACKPLAN_LOG_LEVEL`` (e.g. ``DEBUG``)."""

    raw = os.getenv(LOG_LEVEL_ENV)
    if raw is None or not raw.strip():
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"Invalid {LOG_LEVEL_ENV}: {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``TRACKPLAN_LOG_LEVEL`` (INFO when unset) and the format is terse enough
    for CLI output. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
