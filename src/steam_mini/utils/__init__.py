"""Utility functions for Steam Mini."""

from .shaping import icon_url, shape_recent_game, shape_top_game, store_url
from .steam_id import validate_count, validate_steam_id

__all__ = [
    "icon_url",
    "shape_recent_game",
    "shape_top_game",
    "store_url",
    "validate_count",
    "validate_steam_id",
]
