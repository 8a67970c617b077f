"""Fixed board catalogue, one hand-authored layout per difficulty."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .game import Board, NodeType, Position, Side

logger = logging.getLogger(__name__)

DEFAULT_LEVEL_ROOT = Path(__file__).resolve().parent / "levels"

EASY = 1
MEDIUM = 2
HARD = 3

DIFFICULTY_LEVELS: Dict[int, str] = {
    EASY: "easy",
    MEDIUM: "medium",
    HARD: "hard",
}


@dataclass
class NodeSpec:
    position: Position
    node_type: NodeType
    sides: Tuple[Side, ...] = ()


@dataclass
class Level:
    """In-memory representation of a level definition."""

    name: str
    difficulty: int
    rows: int
    cols: int
    nodes: List[NodeSpec] = field(default_factory=list)

    @property
    def metadata(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "difficulty": self.difficulty,
            "dimensions": f"{self.rows}x{self.cols}",
        }

    def build_board(self) -> Board:
        board = Board(self.rows, self.cols)
        factories = {
            NodeType.NONE: board.create_node,
            NodeType.LINK: board.create_link_node,
            NodeType.BULB: board.create_bulb_node,
            NodeType.POWER: board.create_power_node,
        }
        for spec in self.nodes:
            if factories[spec.node_type](spec.position, *spec.sides) is None:
                logger.warning(f"Level {self.name}: node outside board at {spec.position}")
        board.update()
        return board


class LevelLoader:
    """Load level files stored as JSON."""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else DEFAULT_LEVEL_ROOT

    def available(self) -> List[str]:
        return sorted(path.stem for path in self.root.glob("*.json"))

    def load(self, name: str) -> Level:
        path = self.root / f"{name}.json"
        if not path.exists():
            raise FileNotFoundError(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        return self._parse_level(data)

    def _parse_level(self, data: Dict) -> Level:
        level = Level(
            name=data["name"],
            difficulty=int(data.get("difficulty", 0)),
            rows=int(data["rows"]),
            cols=int(data["cols"]),
        )
        for node in data.get("nodes", []):
            row, col = node["position"]
            level.nodes.append(
                NodeSpec(
                    position=Position(int(row), int(col)),
                    node_type=NodeType[str(node.get("type", "none")).upper()],
                    sides=tuple(Side.from_name(side) for side in node.get("sides", [])),
                )
            )
        return level


def generate_by_difficulty(difficulty: int, loader: Optional[LevelLoader] = None) -> Board:
    """Build the catalogue board for ``difficulty`` (1 easy, 2 medium, 3 hard)."""

    try:
        name = DIFFICULTY_LEVELS[difficulty]
    except KeyError as exc:
        raise ValueError(f"Unknown difficulty: {difficulty}") from exc
    level = (loader or LevelLoader()).load(name)
    return level.build_board()


__all__ = [
    "DEFAULT_LEVEL_ROOT",
    "DIFFICULTY_LEVELS",
    "EASY",
    "HARD",
    "Level",
    "LevelLoader",
    "MEDIUM",
    "NodeSpec",
    "generate_by_difficulty",
]
