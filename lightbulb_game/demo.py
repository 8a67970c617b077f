"""Command line front-end for playing the light bulb puzzle in a terminal."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, TextIO

from .game import Board, GameNode, NodeType, Position, Side
from .gamelog import GameLog, GameLogError
from .history import GameManager
from .levels import DIFFICULTY_LEVELS, EASY, LevelLoader
from .settings import configure_logging, resolve_paths
from .tracking import TrackingInfo

logger = logging.getLogger(__name__)

GLYPHS: Dict[FrozenSet[Side], str] = {
    frozenset(): " ",
    frozenset({Side.NORTH}): "╵",
    frozenset({Side.EAST}): "╶",
    frozenset({Side.SOUTH}): "╷",
    frozenset({Side.WEST}): "╴",
    frozenset({Side.NORTH, Side.SOUTH}): "│",
    frozenset({Side.EAST, Side.WEST}): "─",
    frozenset({Side.NORTH, Side.EAST}): "└",
    frozenset({Side.EAST, Side.SOUTH}): "┌",
    frozenset({Side.SOUTH, Side.WEST}): "┐",
    frozenset({Side.WEST, Side.NORTH}): "┘",
    frozenset({Side.NORTH, Side.EAST, Side.SOUTH}): "├",
    frozenset({Side.EAST, Side.SOUTH, Side.WEST}): "┬",
    frozenset({Side.SOUTH, Side.WEST, Side.NORTH}): "┤",
    frozenset({Side.WEST, Side.NORTH, Side.EAST}): "┴",
    frozenset({Side.NORTH, Side.EAST, Side.SOUTH, Side.WEST}): "┼",
}

TYPE_MARKERS: Dict[NodeType, str] = {
    NodeType.NONE: " ",
    NodeType.LINK: " ",
    NodeType.BULB: "B",
    NodeType.POWER: "P",
}

HELP_TEXT = "Commands: turn ROW COL | undo | redo | hints | live | show | quit"


def render_cell(node: GameNode, hint: Optional[int] = None) -> str:
    glyph = GLYPHS[frozenset(node.sides)]
    marker = "*" if node.lit else " "
    if hint is not None:
        marker = str(hint)
    return f"{TYPE_MARKERS[node.type]}{glyph}{marker}"


def render_board(board: Board, tracking: Optional[TrackingInfo] = None) -> str:
    """Render the board as text; lit cells carry ``*`` unless hints are shown."""

    header = "    " + "".join(f"{col:<3}" for col in range(1, board.cols + 1))
    lines: List[str] = [header.rstrip()]
    for row in range(1, board.rows + 1):
        cells = []
        for col in range(1, board.cols + 1):
            position = Position(row, col)
            hint = tracking.hint(position) if tracking is not None else None
            cells.append(render_cell(board.node(position), hint))
        lines.append(f"{row:>2}  " + "".join(cells).rstrip())
    return "\n".join(lines)


class TextSession:
    """Read commands from a stream and apply them to a game manager."""

    def __init__(self, manager: GameManager, out: TextIO):
        self.manager = manager
        self.out = out
        self.show_hints = False
        self.won = manager.all_bulbs_lit()

    def say(self, message: str = "") -> None:
        print(message, file=self.out)

    def show(self) -> None:
        tracking = self.manager.tracking if self.show_hints else None
        self.say(render_board(self.manager.board, tracking))
        mode = "live" if self.manager.live else "review"
        self.say(f"Moves: {self.manager.tracking.total_clicks}  Mode: {mode}")

    def run(self, commands: Iterable[str]) -> None:
        self.show()
        for raw in commands:
            words = raw.strip().lower().split()
            if not words:
                continue
            if words[0] in {"quit", "q", "exit"}:
                break
            self.handle(words)

    def handle(self, words: List[str]) -> None:
        command, args = words[0], words[1:]
        if command in {"turn", "t"}:
            self._turn(args)
        elif command in {"undo", "u"}:
            self.manager.undo()
            self.won = self.manager.all_bulbs_lit()
            self.show()
        elif command in {"redo", "r"}:
            self.manager.redo()
            self.won = self.manager.all_bulbs_lit()
            self.show()
        elif command in {"hints", "h"}:
            self.show_hints = not self.show_hints
            self.show()
        elif command in {"live", "l"}:
            if self.manager.live:
                self.say("Already in live mode.")
                return
            self.manager.switch_to_live_mode()
            self.won = self.manager.all_bulbs_lit()
            self.say("Switched to live mode.")
            self.show()
        elif command in {"show", "s"}:
            self.show()
        else:
            self.say(HELP_TEXT)

    def _turn(self, args: List[str]) -> None:
        if not self.manager.live:
            self.say("Replay in review mode; enter 'live' to continue playing.")
            return
        if self.won:
            self.say("The puzzle is already solved.")
            return
        try:
            row, col = (int(value) for value in args)
        except ValueError:
            self.say("Usage: turn ROW COL")
            return
        position = Position(row, col)
        if not self.manager.board.inside(position):
            self.say(f"No cell at {row} {col}.")
            return
        self.won = self.manager.rotate_node_and_check_result(position)
        self.show()
        if self.won:
            self.say(f"All bulbs are lit! Solved in {self.manager.tracking.total_clicks} moves.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Light bulb puzzle in the terminal")
    parser.add_argument(
        "--difficulty",
        type=int,
        choices=sorted(DIFFICULTY_LEVELS),
        default=EASY,
        help="1 = easy (5x5), 2 = medium (7x7), 3 = hard (9x9).",
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Replay the saved game log instead of starting a new game.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Game log location.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the shuffle.")
    parser.add_argument(
        "--list-levels",
        action="store_true",
        help="Print the available board layouts and exit.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr.")
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    configure_logging(logging.INFO if args.verbose else logging.WARNING)

    paths = resolve_paths(args.log_file)
    loader = LevelLoader(paths.level_root)

    if args.list_levels:
        print("Available levels:", file=stdout)
        for name in loader.available():
            print(f"  {name}", file=stdout)
        return 0

    game_log = GameLog(paths.log_file)
    if args.resume:
        try:
            manager = GameManager.load(game_log)
        except (FileNotFoundError, GameLogError) as exc:
            logger.error(f"Cannot resume game: {exc}")
            return 1
    else:
        rng = random.Random(args.seed) if args.seed is not None else None
        manager = GameManager.new_game(args.difficulty, game_log, rng=rng, loader=loader)

    print("=== Light Bulb Game ===", file=stdout)
    print(HELP_TEXT, file=stdout)
    TextSession(manager, stdout).run(stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
