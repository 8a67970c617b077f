from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lightbulb_game import settings
from lightbulb_game.levels import DEFAULT_LEVEL_ROOT


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.delenv(settings.LOG_FILE_ENV_VAR, raising=False)
    monkeypatch.delenv(settings.LEVEL_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)

    paths = settings.resolve_paths()

    assert paths.log_file == tmp_path / settings.DEFAULT_LOG_FILE
    assert paths.level_root == DEFAULT_LEVEL_ROOT


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv(settings.LOG_FILE_ENV_VAR, str(tmp_path / "game.log"))
    monkeypatch.setenv(settings.LEVEL_ENV_VAR, str(tmp_path))

    paths = settings.resolve_paths()

    assert paths.log_file == tmp_path / "game.log"
    assert paths.level_root == tmp_path


def test_explicit_log_file_wins(monkeypatch, tmp_path):
    monkeypatch.setenv(settings.LOG_FILE_ENV_VAR, str(tmp_path / "env.log"))

    paths = settings.resolve_paths(tmp_path / "flag.log")

    assert paths.log_file == Path(tmp_path / "flag.log")


def test_missing_level_root(monkeypatch, tmp_path):
    monkeypatch.setenv(settings.LEVEL_ENV_VAR, str(tmp_path / "nowhere"))

    with pytest.raises(FileNotFoundError):
        settings.resolve_paths()

    paths = settings.resolve_paths(check_exists=False)
    assert paths.level_root == tmp_path / "nowhere"


def test_configure_logging_installs_single_handler():
    logger = settings.configure_logging(logging.INFO)
    settings.configure_logging(logging.INFO)

    assert logger.name == "lightbulb_game"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == settings.LOG_FORMAT
