"""Game engine components."""

from .game_setup import create_game
from .planner import EvaderPlanner
from .turn_engine import TurnEngine

__all__ = [
    "create_game",
    "EvaderPlanner",
    "TurnEngine",
]
