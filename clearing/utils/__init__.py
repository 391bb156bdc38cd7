"""Utility functions and constants for Tiger Clearing."""

from .constants import (
    BORDERLANDS_WIDTH,
    CLEARING_RADIUS,
    HAND_SPAN,
    HISTORY_CAPACITY,
    MOVE_DURATION_MS,
)
from .geometry import Vector2, distance, is_point_in_triangle
from .rng import GameRNG

__all__ = [
    "BORDERLANDS_WIDTH",
    "CLEARING_RADIUS",
    "HAND_SPAN",
    "HISTORY_CAPACITY",
    "MOVE_DURATION_MS",
    "Vector2",
    "distance",
    "is_point_in_triangle",
    "GameRNG",
]
