"""Core board model and light propagation for the light bulb puzzle."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple


class Side(Enum):
    """Cardinal connector directions of a cell.

    Values are ``(row, col)`` offsets towards the neighbouring cell.
    """

    NORTH = (-1, 0)
    EAST = (0, 1)
    SOUTH = (1, 0)
    WEST = (0, -1)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @property
    def letter(self) -> str:
        return self.name[0]

    @staticmethod
    def from_name(name: str) -> "Side":
        name = name.upper()
        try:
            return Side[name]
        except KeyError as exc:
            raise ValueError(f"Unknown side: {name}") from exc

    @staticmethod
    def from_letter(letter: str) -> "Side":
        for side in Side:
            if side.letter == letter:
                return side
        raise ValueError(f"Unknown side letter: {letter}")

    def rotate_clockwise(self) -> "Side":
        mapping = {
            Side.EAST: Side.SOUTH,
            Side.SOUTH: Side.WEST,
            Side.WEST: Side.NORTH,
            Side.NORTH: Side.EAST,
        }
        return mapping[self]

    def reverse(self) -> "Side":
        mapping = {
            Side.NORTH: Side.SOUTH,
            Side.SOUTH: Side.NORTH,
            Side.EAST: Side.WEST,
            Side.WEST: Side.EAST,
        }
        return mapping[self]


# Signature order of the sides, independent of enum declaration order.
SIGNATURE_ORDER: Tuple[Side, ...] = (Side.NORTH, Side.EAST, Side.SOUTH, Side.WEST)


class NodeType(Enum):
    """Kind of cell; fixed once the node is created."""

    NONE = "E"
    LINK = "L"
    BULB = "B"
    POWER = "P"

    @property
    def char(self) -> str:
        return self.value

    @staticmethod
    def from_char(char: str) -> "NodeType":
        try:
            return NodeType(char)
        except ValueError as exc:
            raise ValueError(f"Unknown node type: {char}") from exc


@dataclass(frozen=True)
class Position:
    """1-based ``(row, col)`` address of a cell."""

    row: int
    col: int

    def neighbour(self, side: Side) -> "Position":
        d_row, d_col = side.vector
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return f"{self.row}@{self.col}"


NodeListener = Callable[["GameNode"], None]


class GameNode:
    """Single cell holding a wire segment, bulb or power source."""

    def __init__(
        self,
        position: Position,
        node_type: NodeType = NodeType.NONE,
        sides: Tuple[Side, ...] = (),
    ) -> None:
        self.position = position
        self.type = node_type
        self._connectors: Dict[Side, bool] = {side: False for side in Side}
        for side in sides:
            self._connectors[side] = True
        self._lit = node_type is NodeType.POWER
        self._listeners: List[NodeListener] = []

    # ------------------------------------------------------------------
    # Observers
    def subscribe(self, listener: NodeListener) -> None:
        if listener is not None and listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: NodeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Type predicates
    def is_bulb(self) -> bool:
        return self.type is NodeType.BULB

    def is_link(self) -> bool:
        return self.type is NodeType.LINK

    def is_power(self) -> bool:
        return self.type is NodeType.POWER

    # ------------------------------------------------------------------
    # Connectors
    def contains_connector(self, side: Side) -> bool:
        return self._connectors[side]

    def north(self) -> bool:
        return self._connectors[Side.NORTH]

    def east(self) -> bool:
        return self._connectors[Side.EAST]

    def south(self) -> bool:
        return self._connectors[Side.SOUTH]

    def west(self) -> bool:
        return self._connectors[Side.WEST]

    @property
    def sides(self) -> Tuple[Side, ...]:
        return tuple(side for side in SIGNATURE_ORDER if self._connectors[side])

    def turn(self) -> None:
        """Rotate the connector map one quarter-turn clockwise."""

        self._connectors = {
            side.rotate_clockwise(): present for side, present in self._connectors.items()
        }
        self._notify()

    # ------------------------------------------------------------------
    # Light state
    @property
    def lit(self) -> bool:
        return self._lit

    def set_lit(self, value: bool) -> None:
        if self.is_power():
            value = True
        if value == self._lit:
            return
        self._lit = value
        self._notify()

    @property
    def signature(self) -> str:
        sides = ",".join(side.letter for side in self.sides)
        return f"{{{self.type.char}{self.position.row}@{self.position.col}[{sides}]}}"

    def __str__(self) -> str:
        return self.signature

    def __repr__(self) -> str:
        return f"GameNode({self.signature}, lit={self._lit})"


class Board:
    """Fixed ``rows`` x ``cols`` grid of nodes with light propagation."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Board dimensions must be positive: {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._grid: List[List[GameNode]] = []
        self._visited: Set[Position] = set()
        self._updating = False
        self._held = False
        for row in range(1, rows + 1):
            cells: List[GameNode] = []
            for col in range(1, cols + 1):
                node = GameNode(Position(row, col))
                node.subscribe(self._on_node_changed)
                cells.append(node)
            self._grid.append(cells)

    def inside(self, position: Position) -> bool:
        return 1 <= position.row <= self.rows and 1 <= position.col <= self.cols

    def node(self, position: Position) -> Optional[GameNode]:
        if not self.inside(position):
            return None
        return self._grid[position.row - 1][position.col - 1]

    def __iter__(self) -> Iterator[GameNode]:
        for cells in self._grid:
            yield from cells

    def positions(self) -> Iterator[Position]:
        for row in range(1, self.rows + 1):
            for col in range(1, self.cols + 1):
                yield Position(row, col)

    # ------------------------------------------------------------------
    # Node factories
    def create_node(self, position: Position, *sides: Side) -> Optional[GameNode]:
        return self._place(position, NodeType.NONE, sides)

    def create_link_node(self, position: Position, *sides: Side) -> Optional[GameNode]:
        return self._place(position, NodeType.LINK, sides)

    def create_bulb_node(self, position: Position, *sides: Side) -> Optional[GameNode]:
        return self._place(position, NodeType.BULB, sides)

    def create_power_node(self, position: Position, *sides: Side) -> Optional[GameNode]:
        return self._place(position, NodeType.POWER, sides)

    def _place(
        self, position: Position, node_type: NodeType, sides: Tuple[Side, ...]
    ) -> Optional[GameNode]:
        if not self.inside(position):
            return None
        previous = self._grid[position.row - 1][position.col - 1]
        previous.unsubscribe(self._on_node_changed)
        node = GameNode(position, node_type, sides)
        node.subscribe(self._on_node_changed)
        self._grid[position.row - 1][position.col - 1] = node
        return node

    # ------------------------------------------------------------------
    # Queries
    def bulbs(self) -> List[GameNode]:
        return [node for node in self if node.is_bulb()]

    def power_node(self) -> Optional[GameNode]:
        for node in self:
            if node.is_power():
                return node
        return None

    def lit_positions(self) -> Set[Position]:
        return {node.position for node in self if node.lit}

    def all_bulbs_lit(self) -> bool:
        return all(node.lit for node in self.bulbs())

    def any_bulb_lit(self) -> bool:
        return any(node.lit for node in self.bulbs())

    def signatures(self) -> List[str]:
        return [node.signature for node in self]

    # ------------------------------------------------------------------
    # Propagation
    def _on_node_changed(self, node: GameNode) -> None:
        # Lit flips raised by an in-progress recompute land here too.
        if self._updating or self._held:
            return
        self.update()

    @contextmanager
    def hold_updates(self) -> Iterator[None]:
        """Skip recomputes triggered by node changes; call :meth:`update` after."""

        previous = self._held
        self._held = True
        try:
            yield
        finally:
            self._held = previous

    def update(self) -> None:
        """Recompute the lit flag of every node from scratch."""

        if self._updating:
            return
        self._updating = True
        try:
            self._visited.clear()
            lit: Set[Position] = set()
            source = self.power_node()
            if source is not None:
                self._path_find(source, Side.EAST, lit)
            for node in self:
                if not node.is_power():
                    node.set_lit(node.position in lit)
        finally:
            self._updating = False

    def _path_find(self, node: Optional[GameNode], coming_from: Side, lit: Set[Position]) -> None:
        if node is None:
            return
        if not node.is_power() and not node.contains_connector(coming_from.reverse()):
            return
        if node.position in self._visited:
            return
        self._visited.add(node.position)
        for side in SIGNATURE_ORDER:
            if not node.contains_connector(side):
                continue
            neighbour = node.position.neighbour(side)
            if not self.inside(neighbour):
                continue
            lit.add(node.position)
            self._path_find(self.node(neighbour), side, lit)


__all__ = [
    "Board",
    "GameNode",
    "NodeListener",
    "NodeType",
    "Position",
    "SIGNATURE_ORDER",
    "Side",
]
