"""Per-cell rotation counters used for hints and the move counter."""

from __future__ import annotations

from typing import List, Tuple

from .game import Position

ROTATION_STEPS = 4


class TrackingInfo:
    """Track remaining turns to the reference orientation and user clicks.

    ``current_step`` counts how many clockwise quarter-turns are still needed
    to bring a cell back to the orientation it had when the board was
    generated.  A forward rotation decrements it, an undo increments it, both
    wrapping inside ``0..3``.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._initial_steps: List[List[int]] = []
        self._current_steps: List[List[int]] = []
        self._user_clicks: List[List[int]] = []
        self.total_clicks = 0
        self.reset()

    def reset(self) -> None:
        self._initial_steps = [[0] * self.cols for _ in range(self.rows)]
        self._current_steps = [[0] * self.cols for _ in range(self.rows)]
        self._user_clicks = [[0] * self.cols for _ in range(self.rows)]
        self.total_clicks = 0

    def save_current_as_initial(self) -> None:
        self._initial_steps = [list(row) for row in self._current_steps]

    def rotate(self, position: Position, user_action: bool) -> None:
        r, c = self._index(position)
        self._current_steps[r][c] = (self._current_steps[r][c] - 1) % ROTATION_STEPS
        if user_action:
            self._user_clicks[r][c] += 1
            self.total_clicks += 1

    def rotate_undo(self, position: Position) -> None:
        # Click counters drop even when the undone turn was not user-made.
        r, c = self._index(position)
        self._current_steps[r][c] = (self._current_steps[r][c] + 1) % ROTATION_STEPS
        self._user_clicks[r][c] -= 1
        self.total_clicks -= 1

    def current_step(self, position: Position) -> int:
        r, c = self._index(position)
        return self._current_steps[r][c]

    def initial_step(self, position: Position) -> int:
        r, c = self._index(position)
        return self._initial_steps[r][c]

    def user_clicks(self, position: Position) -> int:
        r, c = self._index(position)
        return self._user_clicks[r][c]

    def hint(self, position: Position) -> int:
        """Number of clockwise turns that restore the generated orientation."""

        return self.current_step(position)

    def _index(self, position: Position) -> Tuple[int, int]:
        if not (1 <= position.row <= self.rows and 1 <= position.col <= self.cols):
            raise IndexError(f"Position {position} outside {self.rows}x{self.cols} board")
        return position.row - 1, position.col - 1


__all__ = ["ROTATION_STEPS", "TrackingInfo"]
