"""Shared fixtures for the light bulb game tests."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from lightbulb_game.game import Board, Position, Side
from lightbulb_game.gamelog import GameLog
from lightbulb_game.history import GameManager
from lightbulb_game.tracking import TrackingInfo


def make_line_board(bulb_side: Side = Side.WEST) -> Board:
    """1x3 board: POWER(E) - LINK(E,W) - BULB(bulb_side)."""

    board = Board(1, 3)
    board.create_power_node(Position(1, 1), Side.EAST)
    board.create_link_node(Position(1, 2), Side.EAST, Side.WEST)
    board.create_bulb_node(Position(1, 3), bulb_side)
    board.update()
    return board


def make_manager(board: Board, log_path: Path) -> GameManager:
    game_log = GameLog(log_path)
    game_log.save_initial_state(board)
    game_log.end_initial_state()
    return GameManager(
        board,
        TrackingInfo(board.rows, board.cols),
        game_log,
        rng=random.Random(0),
    )


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "log.txt"


@pytest.fixture
def line_board() -> Board:
    return make_line_board()


@pytest.fixture
def line_manager(log_path: Path) -> GameManager:
    # The bulb faces south, one clockwise turn points it west at the link.
    return make_manager(make_line_board(Side.SOUTH), log_path)
