from __future__ import annotations

import json
import logging

import pytest

from lightbulb_game.game import NodeType, Position, Side
from lightbulb_game.levels import (
    DIFFICULTY_LEVELS,
    LevelLoader,
    generate_by_difficulty,
)


def write_level(root, name, **overrides):
    data = {
        "name": "Tiny",
        "difficulty": 1,
        "rows": 1,
        "cols": 2,
        "nodes": [
            {"position": [1, 1], "type": "power", "sides": ["EAST"]},
            {"position": [1, 2], "type": "bulb", "sides": ["WEST"]},
        ],
    }
    data.update(overrides)
    (root / f"{name}.json").write_text(json.dumps(data), encoding="utf-8")


@pytest.mark.parametrize("difficulty, size", [(1, 5), (2, 7), (3, 9)])
def test_catalogue_boards(difficulty, size):
    board = generate_by_difficulty(difficulty)

    assert (board.rows, board.cols) == (size, size)
    assert sum(node.is_power() for node in board) == 1
    assert board.bulbs()


def test_catalogue_lists_every_difficulty():
    assert LevelLoader().available() == sorted(DIFFICULTY_LEVELS.values())


@pytest.mark.parametrize("difficulty", [0, 4, -1])
def test_unknown_difficulty_is_rejected(difficulty):
    with pytest.raises(ValueError, match="Unknown difficulty"):
        generate_by_difficulty(difficulty)


def test_missing_level_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LevelLoader(tmp_path).load("easy")


def test_custom_level_root(tmp_path):
    write_level(tmp_path, "easy")
    loader = LevelLoader(tmp_path)

    level = loader.load("easy")
    board = generate_by_difficulty(1, loader)

    assert level.metadata == {"name": "Tiny", "difficulty": 1, "dimensions": "1x2"}
    assert level.nodes[0].node_type is NodeType.POWER
    assert level.nodes[1].sides == (Side.WEST,)
    assert board.all_bulbs_lit()


def test_nodes_outside_the_level_are_skipped(tmp_path, caplog):
    write_level(
        tmp_path,
        "broken",
        nodes=[{"position": [3, 1], "type": "link", "sides": ["NORTH"]}],
    )

    with caplog.at_level(logging.WARNING, logger="lightbulb_game.levels"):
        board = LevelLoader(tmp_path).load("broken").build_board()

    assert "outside board" in caplog.text
    assert board.node(Position(1, 1)).type is NodeType.NONE
