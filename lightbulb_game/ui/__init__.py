"""User interface package for the light bulb game."""

from .layout import BoardGeometry, compute_geometry
from .toolkit import LightBulbUI

__all__ = [
    "BoardGeometry",
    "LightBulbUI",
    "compute_geometry",
]
