"""Layout constants for the light bulb game UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Tile metrics
TILE_SIZE: int = 72
BOARD_OUTER_PADDING: int = 24
WIRE_WIDTH: int = 8
NODE_RADIUS: int = 16

# Status bar metrics
STATUS_HEIGHT: int = 48
STATUS_PADDING: int = 12

# Colors expressed as RGB tuples
BACKGROUND_COLOR: Tuple[int, int, int] = (12, 14, 26)
BOARD_BACKGROUND_COLOR: Tuple[int, int, int] = (20, 24, 44)
GRID_LINE_COLOR: Tuple[int, int, int] = (58, 64, 96)
WIRE_COLOR: Tuple[int, int, int] = (120, 128, 150)
LIT_WIRE_COLOR: Tuple[int, int, int] = (255, 214, 90)
POWER_COLOR: Tuple[int, int, int] = (255, 94, 0)
BULB_COLOR: Tuple[int, int, int] = (90, 96, 120)
LIT_BULB_COLOR: Tuple[int, int, int] = (255, 240, 160)
TEXT_COLOR: Tuple[int, int, int] = (232, 236, 244)
HINT_COLOR: Tuple[int, int, int] = (140, 255, 180)


@dataclass(frozen=True)
class BoardGeometry:
    """Pixel rectangles for the major UI regions."""

    board: Tuple[int, int, int, int]
    status: Tuple[int, int, int, int]
    window: Tuple[int, int]


def compute_geometry(rows: int, cols: int, tile_size: int = TILE_SIZE) -> BoardGeometry:
    """Compute useful rectangles for rendering the game window."""

    board_width = cols * tile_size
    board_height = rows * tile_size

    board_x = BOARD_OUTER_PADDING
    board_y = BOARD_OUTER_PADDING

    status_x = board_x
    status_y = board_y + board_height + STATUS_PADDING

    window_width = board_x + board_width + BOARD_OUTER_PADDING
    window_height = status_y + STATUS_HEIGHT + BOARD_OUTER_PADDING

    return BoardGeometry(
        board=(board_x, board_y, board_width, board_height),
        status=(status_x, status_y, board_width, STATUS_HEIGHT),
        window=(window_width, window_height),
    )
