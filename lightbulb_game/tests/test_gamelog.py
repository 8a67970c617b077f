from __future__ import annotations

import logging
import random

import pytest

from lightbulb_game.game import NodeType, Position, Side
from lightbulb_game.gamelog import (
    END_INITIAL_STATE,
    ActionLogEntry,
    GameLog,
    GameLogError,
    parse_signature,
)
from lightbulb_game.history import GameManager

from .conftest import make_line_board


def test_parse_signature():
    assert parse_signature("{L2@3[N,W]}") == (NodeType.LINK, Position(2, 3), (Side.NORTH, Side.WEST))
    assert parse_signature("{E1@1[]}") == (NodeType.NONE, Position(1, 1), ())


@pytest.mark.parametrize("text", ["{X1@1[N]}", "{L1@1[N W]}", "L1@1[N]", "{L1-1[N]}", "{L1@1[Q]}"])
def test_parse_signature_rejects_malformed_text(text):
    with pytest.raises(GameLogError):
        parse_signature(text)


def test_action_entry_renders_as_turn_record():
    entry = ActionLogEntry(Position(2, 1), "{B2@1[E]}")

    assert str(entry) == "TURN {B2@1[E]}"


def test_log_file_layout(line_manager, log_path):
    line_manager.rotate(Position(1, 3))

    assert log_path.read_text(encoding="utf-8").splitlines() == [
        "SIZE 1 3",
        "NODE {P1@1[E]}",
        "NODE {L1@2[E,W]}",
        "NODE {B1@3[S]}",
        END_INITIAL_STATE,
        "TURN {B1@3[W]}",
    ]


def assert_same_session(left: GameManager, right: GameManager) -> None:
    assert left.board.signatures() == right.board.signatures()
    assert left.board.lit_positions() == right.board.lit_positions()
    assert left.tracking.total_clicks == right.tracking.total_clicks
    for position in left.board.positions():
        assert left.tracking.current_step(position) == right.tracking.current_step(position)
        assert left.tracking.initial_step(position) == right.tracking.initial_step(position)
        assert left.tracking.user_clicks(position) == right.tracking.user_clicks(position)


def test_saved_game_reloads_identically(log_path):
    manager = GameManager.new_game(1, GameLog(log_path), rng=random.Random(3))
    for position in (Position(1, 1), Position(2, 2), Position(2, 2), Position(5, 5)):
        manager.rotate(position)

    resumed = GameManager.load(GameLog(log_path))

    assert_same_session(manager, resumed)
    assert resumed.action_log == manager.action_log


def test_undone_moves_are_dropped_when_going_live(log_path):
    manager = GameManager.new_game(1, GameLog(log_path), rng=random.Random(5))
    manager.rotate(Position(1, 1))
    manager.rotate(Position(3, 3))
    manager.undo()
    manager.switch_to_live_mode()
    manager.rotate(Position(4, 2))

    resumed = GameManager.load(GameLog(log_path))

    assert_same_session(manager, resumed)
    assert [entry.position for entry in resumed.action_log] == [Position(1, 1), Position(4, 2)]


def test_going_live_after_reload_keeps_setup_records(log_path):
    manager = GameManager.new_game(2, GameLog(log_path), rng=random.Random(11))
    manager.rotate(Position(1, 1))
    manager.rotate(Position(7, 7))

    reviewed = GameManager.load(GameLog(log_path))
    reviewed.undo()
    reviewed.switch_to_live_mode()
    resumed = GameManager.load(GameLog(log_path))

    assert_same_session(reviewed, resumed)
    assert [entry.position for entry in resumed.action_log] == [Position(1, 1)]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        GameLog(tmp_path / "missing.txt").load()


def test_undecodable_bytes_raise_game_log_error(tmp_path):
    path = tmp_path / "log.txt"
    path.write_bytes(b"SIZE 1 1\nNODE {L1@1[\xff]}\n")

    with pytest.raises(GameLogError, match="Unreadable game log"):
        GameLog(path).load()


@pytest.mark.parametrize(
    "content",
    [
        "NODE {L1@1[E]}\n",
        "SIZE 1 1\nSIZE 1 1\n",
        "SIZE one 1\n",
        "SIZE 0 1\n",
        "SIZE 1 1\nNODE {L1@1[Q]}\n",
        "SIZE 1 1\nNODE {L1@1[E]}\nFLIP {L1@1[E]}\n",
        "SIZE 1 1\nNODE {L2@1[E]}\n",
        "SIZE 1 1\nNODE {L1@1[E]}\nTURN {L1@2[S]}\n",
        "SIZE 1 1\nNODE {L1@1[E]}\nEND INITIAL STATE\nEND INITIAL STATE\n",
    ],
)
def test_corrupt_logs_raise(tmp_path, content):
    path = tmp_path / "log.txt"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(GameLogError):
        GameLog(path).load()


def test_write_failure_is_logged(tmp_path, caplog):
    game_log = GameLog(tmp_path)

    with caplog.at_level(logging.ERROR, logger="lightbulb_game.gamelog"):
        game_log.save_initial_state(make_line_board())

    assert "Failed to write game log" in caplog.text


def test_replay_mismatch_is_logged_but_loaded(tmp_path, caplog):
    path = tmp_path / "log.txt"
    path.write_text(
        "SIZE 1 2\nNODE {P1@1[E]}\nNODE {L1@2[N]}\nEND INITIAL STATE\nTURN {L1@2[S]}\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="lightbulb_game.gamelog"):
        loaded = GameLog(path).load()

    assert "does not match recorded {L1@2[S]}" in caplog.text
    assert loaded.action_log == [ActionLogEntry(Position(1, 2), "{L1@2[E]}")]


def test_log_without_marker_treats_turns_as_setup(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text(
        "SIZE 1 2\nNODE {P1@1[E]}\nNODE {B1@2[N]}\n"
        "TURN {B1@2[E]}\nTURN {B1@2[S]}\nTURN {B1@2[W]}\n",
        encoding="utf-8",
    )
    game_log = GameLog(path)

    loaded = game_log.load()

    assert loaded.action_log == []
    assert loaded.board.all_bulbs_lit()
    assert loaded.tracking.initial_step(Position(1, 2)) == 1
    assert loaded.tracking.total_clicks == 0
    assert game_log.initial_lines[-1] == "TURN {B1@2[W]}"
    assert not game_log.in_setup


def test_blank_lines_are_ignored(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text(
        "\nSIZE 1 2\n\nNODE {P1@1[E]}\n  NODE {B1@2[W]}  \n\nEND INITIAL STATE\n\n",
        encoding="utf-8",
    )

    loaded = GameLog(path).load()

    assert loaded.board.all_bulbs_lit()
