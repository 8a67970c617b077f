"""Interactive pygame window for the light bulb puzzle."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

import pygame

from lightbulb_game.gamelog import GameLog, GameLogError
from lightbulb_game.history import GameManager
from lightbulb_game.levels import DIFFICULTY_LEVELS, EASY, LevelLoader
from lightbulb_game.settings import configure_logging, resolve_paths
from lightbulb_game.ui import LightBulbUI
from lightbulb_game.ui import layout

logger = logging.getLogger("lightbulb_game.main")


def status_text(manager: GameManager, ui: LightBulbUI) -> str:
    if ui.won:
        return f"Solved in {manager.tracking.total_clicks} moves!"
    if not manager.live:
        return "Review: U/R step through moves, SPACE to play from here"
    return f"Moves: {manager.tracking.total_clicks}   U undo  R redo  H hints"


def draw_status(
    surface: pygame.Surface,
    status_rect: pygame.Rect,
    text: str,
    font: pygame.font.Font,
) -> None:
    """Render the move counter and key help below the board."""

    text_surface = font.render(text, True, layout.TEXT_COLOR)
    text_rect = text_surface.get_rect()
    text_rect.midleft = (status_rect.x + layout.STATUS_PADDING, status_rect.centery)
    surface.blit(text_surface, text_rect)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Light Bulb Game launcher")
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
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.INFO if args.verbose else logging.WARNING)

    paths = resolve_paths(args.log_file)
    game_log = GameLog(paths.log_file)
    if args.resume:
        try:
            manager = GameManager.load(game_log)
        except (FileNotFoundError, GameLogError) as exc:
            logger.error(f"Cannot resume game: {exc}")
            return 1
    else:
        rng = random.Random(args.seed) if args.seed is not None else None
        manager = GameManager.new_game(
            args.difficulty, game_log, rng=rng, loader=LevelLoader(paths.level_root)
        )

    pygame.init()
    pygame.font.init()

    geometry = layout.compute_geometry(manager.board.rows, manager.board.cols)
    screen = pygame.display.set_mode(geometry.window)
    pygame.display.set_caption("Light Bulb Game")

    board_rect = pygame.Rect(*geometry.board)
    status_rect = pygame.Rect(*geometry.status)
    ui = LightBulbUI(
        manager,
        cell_size=layout.TILE_SIZE,
        surface=pygame.Surface(board_rect.size),
    )
    font = pygame.font.Font(None, 26)

    clock = pygame.time.Clock()
    running = True

    while running:
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                x, y = event.pos
                # Translate window coordinates into board coordinates.
                events.append(
                    pygame.event.Event(
                        pygame.MOUSEBUTTONDOWN,
                        button=event.button,
                        pos=(x - board_rect.x, y - board_rect.y),
                    )
                )
            else:
                events.append(event)
        ui.process_events(events)

        screen.fill(layout.BACKGROUND_COLOR)
        screen.blit(ui.render(), board_rect.topleft)
        draw_status(screen, status_rect, status_text(manager, ui), font)

        pygame.display.flip()
        clock.tick(60)

    ui.close()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
