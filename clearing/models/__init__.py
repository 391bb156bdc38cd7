"""Data models for Tiger Clearing."""

from .board import Board, Zone
from .game import GameConfig, GameState, GameStats, Turn, Winner
from .history import TurnHistory, TurnSnapshot
from .piece import (
    EvaderTraits,
    HunterTraits,
    MoveAnimation,
    Piece,
    Role,
    Specialization,
    Status,
)

__all__ = [
    "Board",
    "Zone",
    "GameConfig",
    "GameState",
    "GameStats",
    "Turn",
    "Winner",
    "TurnHistory",
    "TurnSnapshot",
    "EvaderTraits",
    "HunterTraits",
    "MoveAnimation",
    "Piece",
    "Role",
    "Specialization",
    "Status",
]
