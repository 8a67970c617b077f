"""Minimal pygame based board view and input handling.

Rendering is kept deterministic so it can be exercised in automated tests
using the SDL ``dummy`` video driver.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Set, Tuple

from ..game import GameNode, Position
from ..history import GameManager
from . import layout


# The import is performed lazily in ``ensure_pygame`` so test environments can
# select the SDL drivers before pygame initialises.
_PYGAME = None


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        _PYGAME = __import__("pygame")
        _PYGAME.display.init()
        _PYGAME.font.init()
    return _PYGAME


class LightBulbUI:
    """Pygame view of a game session that turns clicks into rotations."""

    def __init__(
        self,
        manager: GameManager,
        *,
        cell_size: int = layout.TILE_SIZE,
        surface=None,
        use_display: bool = False,
    ) -> None:
        pygame = ensure_pygame()
        self.manager = manager
        self.cell_size = cell_size
        width = manager.board.cols * cell_size
        height = manager.board.rows * cell_size
        self.surface = surface or pygame.Surface((width, height))
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode((width, height))
        self.show_hints = False
        self.won = manager.all_bulbs_lit()
        self.dirty: Set[Position] = set()
        self._full_redraw = True
        self.font = pygame.font.Font(pygame.font.get_default_font(), max(12, cell_size // 3))
        for node in manager.board:
            node.subscribe(self._on_node_changed)

    def close(self) -> None:
        for node in self.manager.board:
            node.unsubscribe(self._on_node_changed)

    def _on_node_changed(self, node: GameNode) -> None:
        self.dirty.add(node.position)

    # ------------------------------------------------------------------
    # Input handling
    def process_events(self, events: Iterable[object]) -> None:
        pygame = ensure_pygame()
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def position_from_pixel(self, pos: Tuple[int, int]) -> Optional[Position]:
        x, y = pos
        if x < 0 or y < 0:
            return None
        position = Position(y // self.cell_size + 1, x // self.cell_size + 1)
        if not self.manager.board.inside(position):
            return None
        return position

    def _handle_click(self, pos: Tuple[int, int]) -> None:
        if self.won or not self.manager.live:
            return
        position = self.position_from_pixel(pos)
        if position is None:
            return
        self.won = self.manager.rotate_node_and_check_result(position)

    def _handle_key(self, key: int) -> None:
        pygame = ensure_pygame()
        if key == pygame.K_u:
            self.manager.undo()
        elif key == pygame.K_r:
            self.manager.redo()
        elif key == pygame.K_h:
            self.show_hints = not self.show_hints
            self.dirty.update(node.position for node in self.manager.board)
        elif key == pygame.K_SPACE and not self.manager.live:
            self.manager.switch_to_live_mode()
        self.won = self.manager.all_bulbs_lit()

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self):
        pygame = ensure_pygame()
        if self._full_redraw:
            self.surface.fill(layout.BOARD_BACKGROUND_COLOR)
            nodes = list(self.manager.board)
            self._full_redraw = False
        else:
            nodes = [self.manager.board.node(position) for position in self.dirty]
        for node in nodes:
            self._draw_node(node)
        self.dirty.clear()
        if self.screen:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def _cell_rect(self, position: Position):
        pygame = ensure_pygame()
        return pygame.Rect(
            (position.col - 1) * self.cell_size,
            (position.row - 1) * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _draw_node(self, node: GameNode) -> None:
        rect = self._cell_rect(node.position)
        # Cells never paint outside their own rect.
        previous_clip = self.surface.get_clip()
        self.surface.set_clip(rect)
        try:
            self._draw_cell(node, rect)
        finally:
            self.surface.set_clip(previous_clip)

    def _draw_cell(self, node: GameNode, rect) -> None:
        pygame = ensure_pygame()
        pygame.draw.rect(self.surface, layout.BOARD_BACKGROUND_COLOR, rect)
        pygame.draw.rect(self.surface, layout.GRID_LINE_COLOR, rect, 1)
        wire_color = layout.LIT_WIRE_COLOR if node.lit else layout.WIRE_COLOR
        half = self.cell_size // 2
        for side in node.sides:
            d_row, d_col = side.vector
            end = (rect.centerx + d_col * half, rect.centery + d_row * half)
            pygame.draw.line(self.surface, wire_color, rect.center, end, layout.WIRE_WIDTH)
        radius = min(layout.NODE_RADIUS, self.cell_size // 3)
        if node.is_power():
            pygame.draw.circle(self.surface, layout.POWER_COLOR, rect.center, radius)
        elif node.is_bulb():
            color = layout.LIT_BULB_COLOR if node.lit else layout.BULB_COLOR
            pygame.draw.circle(self.surface, color, rect.center, radius)
        if self.show_hints:
            self._draw_text(rect, str(self.manager.tracking.hint(node.position)))

    def _draw_text(self, rect, text: str) -> None:
        label = self.font.render(text, True, layout.HINT_COLOR)
        label_rect = label.get_rect()
        label_rect.topright = (rect.right - 4, rect.top + 2)
        self.surface.blit(label, label_rect)


__all__ = ["LightBulbUI", "ensure_pygame"]
