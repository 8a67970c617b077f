"""Light Bulb Game package."""

from .game import Board, GameNode, NodeType, Position, Side
from .gamelog import ActionLogEntry, GameLog, GameLogError
from .history import GameManager
from .levels import LevelLoader, generate_by_difficulty
from .tracking import TrackingInfo
from .ui import LightBulbUI

__all__ = [
    "ActionLogEntry",
    "Board",
    "GameLog",
    "GameLogError",
    "GameManager",
    "GameNode",
    "LevelLoader",
    "LightBulbUI",
    "NodeType",
    "Position",
    "Side",
    "TrackingInfo",
    "generate_by_difficulty",
]
