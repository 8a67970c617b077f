"""Line oriented game log used to persist and replay a session.

The log file looks like::

    SIZE 5 5
    NODE {L1@1[E,S]}
    ...
    TURN {L1@1[S,W]}
    END INITIAL STATE
    TURN {B2@1[E]}

``NODE`` lines describe the generated board, ``TURN`` lines before the marker
are the shuffle rotations and ``TURN`` lines after it are the player's moves.
Every ``TURN`` carries the node signature *after* the rotation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .game import Board, GameNode, NodeType, Position, Side
from .tracking import TrackingInfo

logger = logging.getLogger(__name__)

SIZE_PREFIX = "SIZE"
NODE_PREFIX = "NODE"
TURN_PREFIX = "TURN"
END_INITIAL_STATE = "END INITIAL STATE"

SIGNATURE_PATTERN = re.compile(
    r"^\{(?P<type>[BLPE])(?P<row>\d+)@(?P<col>\d+)\[(?P<sides>(?:[NESW](?:,[NESW])*)?)\]\}$"
)


class GameLogError(ValueError):
    """Raised when a persisted game log cannot be parsed."""


@dataclass(frozen=True)
class ActionLogEntry:
    """One player rotation: the node position and its signature afterwards."""

    position: Position
    signature: str

    def __str__(self) -> str:
        return f"{TURN_PREFIX} {self.signature}"


@dataclass
class LoadedGame:
    """Board, tracking and move history rebuilt from a log file."""

    board: Board
    tracking: TrackingInfo
    action_log: List[ActionLogEntry] = field(default_factory=list)


def parse_signature(text: str) -> Tuple[NodeType, Position, Tuple[Side, ...]]:
    match = SIGNATURE_PATTERN.match(text.strip())
    if match is None:
        raise GameLogError(f"Malformed node signature: {text!r}")
    node_type = NodeType.from_char(match.group("type"))
    position = Position(int(match.group("row")), int(match.group("col")))
    letters = match.group("sides")
    sides = tuple(Side.from_letter(letter) for letter in letters.split(",") if letter)
    return node_type, position, sides


class GameLog:
    """Read and write the game log file at ``path``."""

    def __init__(self, path: Path):
        self.path = Path(path)
        # NODE lines plus setup TURN lines, replayed on every full rewrite.
        self.initial_lines: List[str] = []
        self.in_setup = True

    # ------------------------------------------------------------------
    # Writing
    def save_initial_state(self, board: Board) -> None:
        self.initial_lines = [f"{NODE_PREFIX} {node.signature}" for node in board]
        self.in_setup = True
        lines = [f"{SIZE_PREFIX} {board.rows} {board.cols}", *self.initial_lines]
        self._write(lines, append=False)

    def append_turn(self, node: GameNode) -> None:
        line = f"{TURN_PREFIX} {node.signature}"
        if self.in_setup:
            self.initial_lines.append(line)
        self._write([line], append=True)

    def end_initial_state(self) -> None:
        self.in_setup = False
        self._write([END_INITIAL_STATE], append=True)

    def truncate_to(self, entries: Sequence[ActionLogEntry], rows: int, cols: int) -> None:
        """Rewrite the file with the initial state followed by ``entries``."""

        lines = [f"{SIZE_PREFIX} {rows} {cols}", *self.initial_lines, END_INITIAL_STATE]
        lines.extend(str(entry) for entry in entries)
        self.in_setup = False
        self._write(lines, append=False)

    def _write(self, lines: Iterable[str], *, append: bool) -> None:
        mode = "a" if append else "w"
        try:
            with self.path.open(mode, encoding="utf-8") as handle:
                for line in lines:
                    handle.write(line + "\n")
        except OSError as exc:
            logger.error(f"Failed to write game log {self.path}: {exc}")

    # ------------------------------------------------------------------
    # Reading
    def load(self) -> LoadedGame:
        if not self.path.exists():
            raise FileNotFoundError(self.path)
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise GameLogError(f"Unreadable game log {self.path}: {exc}") from exc
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]

        board = self._parse_size(lines)
        tracking = TrackingInfo(board.rows, board.cols)
        initial_lines: List[str] = []

        for line in lines:
            if not line.startswith(NODE_PREFIX + " "):
                continue
            node_type, position, sides = self._parse_record(line, NODE_PREFIX, board)
            self._create(board, node_type, position, sides)
            initial_lines.append(f"{NODE_PREFIX} {board.node(position).signature}")

        action_log: List[ActionLogEntry] = []
        in_setup = True
        with board.hold_updates():
            for number, line in enumerate(lines, start=1):
                if line == END_INITIAL_STATE:
                    if not in_setup:
                        raise GameLogError(f"Line {number}: duplicate {END_INITIAL_STATE!r} marker")
                    in_setup = False
                    tracking.save_current_as_initial()
                    continue
                if line.startswith((SIZE_PREFIX + " ", NODE_PREFIX + " ")):
                    continue
                if not line.startswith(TURN_PREFIX + " "):
                    raise GameLogError(f"Line {number}: unknown record {line!r}")
                _, position, _ = self._parse_record(line, TURN_PREFIX, board)
                node = board.node(position)
                node.turn()
                recorded = line[len(TURN_PREFIX) + 1:].strip()
                if node.signature != recorded:
                    logger.warning(
                        f"Line {number}: replayed {node.signature} does not match recorded {recorded}"
                    )
                tracking.rotate(position, not in_setup)
                if in_setup:
                    initial_lines.append(line)
                else:
                    action_log.append(ActionLogEntry(position, node.signature))

        if in_setup:
            # Saved before the shuffle finished; baseline whatever is there.
            tracking.save_current_as_initial()

        self.initial_lines = initial_lines
        self.in_setup = False
        board.update()
        logger.info(
            f"Loaded {board.rows}x{board.cols} game from {self.path} "
            f"with {len(action_log)} recorded moves"
        )
        return LoadedGame(board=board, tracking=tracking, action_log=action_log)

    @staticmethod
    def _parse_size(lines: Sequence[str]) -> Board:
        sizes = [line for line in lines if line.startswith(SIZE_PREFIX + " ")]
        if len(sizes) != 1:
            raise GameLogError(f"Expected exactly one {SIZE_PREFIX} line, found {len(sizes)}")
        parts = sizes[0].split()
        if len(parts) != 3:
            raise GameLogError(f"Malformed size line: {sizes[0]!r}")
        try:
            rows, cols = int(parts[1]), int(parts[2])
            return Board(rows, cols)
        except ValueError as exc:
            raise GameLogError(f"Malformed size line: {sizes[0]!r}") from exc

    @staticmethod
    def _parse_record(
        line: str, prefix: str, board: Board
    ) -> Tuple[NodeType, Position, Tuple[Side, ...]]:
        node_type, position, sides = parse_signature(line[len(prefix) + 1:])
        if not board.inside(position):
            raise GameLogError(
                f"{prefix} record outside {board.rows}x{board.cols} board: {line!r}"
            )
        return node_type, position, sides

    @staticmethod
    def _create(
        board: Board, node_type: NodeType, position: Position, sides: Tuple[Side, ...]
    ) -> Optional[GameNode]:
        factories = {
            NodeType.NONE: board.create_node,
            NodeType.LINK: board.create_link_node,
            NodeType.BULB: board.create_bulb_node,
            NodeType.POWER: board.create_power_node,
        }
        return factories[node_type](position, *sides)


__all__ = [
    "ActionLogEntry",
    "END_INITIAL_STATE",
    "GameLog",
    "GameLogError",
    "LoadedGame",
    "parse_signature",
]
