"""Runtime configuration resolved from environment variables."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .levels import DEFAULT_LEVEL_ROOT

LOG_FILE_ENV_VAR = "LIGHTBULB_GAME_LOG_FILE"
LEVEL_ENV_VAR = "LIGHTBULB_GAME_LEVEL_ROOT"

DEFAULT_LOG_FILE = "log.txt"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class GamePaths:
    """Bundle with the resolved game log file and level directory."""

    log_file: Path
    level_root: Path


def _read_path(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def resolve_paths(log_file: Optional[Path] = None, check_exists: bool = True) -> GamePaths:
    """Resolve game paths using environment variables.

    Parameters
    ----------
    log_file:
        Explicit log file, e.g. from a command line flag. Takes precedence over
        :data:`LOG_FILE_ENV_VAR`.
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if the level directory does
        not exist. The log file is allowed to be missing since a new game
        creates it.
    """

    if log_file is None:
        log_file = _read_path(LOG_FILE_ENV_VAR, Path.cwd() / DEFAULT_LOG_FILE)
    level_root = _read_path(LEVEL_ENV_VAR, DEFAULT_LEVEL_ROOT)

    if check_exists and not level_root.is_dir():
        raise FileNotFoundError(f"Level directory does not exist: {level_root}")

    return GamePaths(log_file=Path(log_file), level_root=level_root)


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a console handler to the package logger."""

    logger = logging.getLogger("lightbulb_game")
    logger.setLevel(level)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    return logger


__all__ = [
    "DEFAULT_LOG_FILE",
    "GamePaths",
    "LEVEL_ENV_VAR",
    "LOG_FILE_ENV_VAR",
    "configure_logging",
    "resolve_paths",
]
