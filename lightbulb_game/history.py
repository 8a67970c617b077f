"""Game session manager: rotations, undo/redo history and shuffling."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .game import Board, Position
from .gamelog import ActionLogEntry, GameLog
from .levels import LevelLoader, generate_by_difficulty
from .tracking import ROTATION_STEPS, TrackingInfo

logger = logging.getLogger(__name__)


class GameManager:
    """High level session handling player moves and their history.

    ``current_step_index`` points at the action log entry that was applied
    last; ``-1`` means no entry is applied.  Undo walks the cursor back without
    dropping entries, a new player move after an undo discards everything past
    the cursor.
    """

    def __init__(
        self,
        board: Board,
        tracking: TrackingInfo,
        game_log: GameLog,
        *,
        action_log: Optional[Sequence[ActionLogEntry]] = None,
        live: bool = True,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.board = board
        self.tracking = tracking
        self.game_log = game_log
        self._action_log: List[ActionLogEntry] = list(action_log or [])
        self.current_step_index = len(self._action_log) - 1
        self.live = live
        self.rng = rng or random.Random()

    @classmethod
    def new_game(
        cls,
        difficulty: int,
        game_log: GameLog,
        *,
        rng: Optional[random.Random] = None,
        loader: Optional[LevelLoader] = None,
    ) -> "GameManager":
        """Generate, shuffle and persist a fresh board."""

        board = generate_by_difficulty(difficulty, loader)
        manager = cls(board, TrackingInfo(board.rows, board.cols), game_log, rng=rng)
        game_log.save_initial_state(board)
        rounds = 0
        while manager.any_bulb_lit():
            manager.shuffle()
            rounds += 1
        manager.tracking.save_current_as_initial()
        game_log.end_initial_state()
        logger.info(
            f"New {board.rows}x{board.cols} game (difficulty {difficulty}) "
            f"shuffled in {rounds} rounds"
        )
        return manager

    @classmethod
    def load(cls, game_log: GameLog) -> "GameManager":
        """Rebuild a saved session; it stays in review mode until switched live."""

        loaded = game_log.load()
        return cls(
            loaded.board,
            loaded.tracking,
            game_log,
            action_log=loaded.action_log,
            live=False,
        )

    # ------------------------------------------------------------------
    # Moves
    @property
    def action_log(self) -> List[ActionLogEntry]:
        return list(self._action_log)

    def rotate(self, position: Position, user_action: bool = True) -> None:
        node = self.board.node(position)
        if node is None:
            return
        # The board recomputes lighting on every node change.
        node.turn()
        self.game_log.append_turn(node)
        if user_action:
            del self._action_log[self.current_step_index + 1:]
            self._action_log.append(ActionLogEntry(position, node.signature))
            self.current_step_index += 1
        self.tracking.rotate(position, user_action)

    def rotate_node_and_check_result(self, position: Position) -> bool:
        self.rotate(position, True)
        return self.all_bulbs_lit()

    def shuffle(self) -> None:
        """Rotate every cell a random 0-3 quarter-turns as setup moves."""

        for position in self.board.positions():
            for _ in range(self.rng.randrange(ROTATION_STEPS)):
                self.rotate(position, False)

    def can_undo(self) -> bool:
        return self.current_step_index >= 0

    def can_redo(self) -> bool:
        return self.current_step_index + 1 < len(self._action_log)

    def undo(self) -> None:
        if not self.can_undo():
            return
        entry = self._action_log[self.current_step_index]
        node = self.board.node(entry.position)
        # Three clockwise turns equal one counter-clockwise turn.
        for _ in range(ROTATION_STEPS - 1):
            node.turn()
        self.tracking.rotate_undo(entry.position)
        self.current_step_index -= 1

    def redo(self) -> None:
        if not self.can_redo():
            return
        entry = self._action_log[self.current_step_index + 1]
        self.board.node(entry.position).turn()
        self.tracking.rotate(entry.position, True)
        self.current_step_index += 1

    def switch_to_live_mode(self) -> None:
        """Drop the replayed future and continue from the current position."""

        del self._action_log[self.current_step_index + 1:]
        self.game_log.truncate_to(self._action_log, self.board.rows, self.board.cols)
        logger.info(f"Switched to live mode keeping {len(self._action_log)} moves")
        self._action_log.clear()
        self.current_step_index = -1
        self.live = True

    # ------------------------------------------------------------------
    # Predicates
    def all_bulbs_lit(self) -> bool:
        return self.board.all_bulbs_lit()

    def any_bulb_lit(self) -> bool:
        return self.board.any_bulb_lit()


__all__ = ["GameManager"]
