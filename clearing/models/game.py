"""Game state container."""

from dataclasses import dataclass, field
from enum import Enum

from ..utils.constants import (
    BOARD_CENTER,
    DEFAULT_DIFFICULTY,
    DEFAULT_REACH,
    DIFFICULTY_LEVELS,
    REACH_LEVELS,
)
from .board import Board
from .history import TurnHistory
from .piece import Piece


class Turn(Enum):
    EVADER = "EVADER"
    HUNTERS = "HUNTERS"


class Winner(Enum):
    EVADER = "EVADER"
    HUNTERS = "HUNTERS"


@dataclass
class GameConfig:
    """Options chosen at reset time."""

    difficulty: int = DEFAULT_DIFFICULTY  # Key into DIFFICULTY_LEVELS
    reach: int = DEFAULT_REACH  # Key into REACH_LEVELS
    evader_ai: bool = True  # False: two-player mode, evader is human-controlled
    center: tuple[float, float] = BOARD_CENTER

    def __post_init__(self):
        """Validate tier selections."""
        if self.difficulty not in DIFFICULTY_LEVELS:
            raise ValueError(
                f"Invalid difficulty: {self.difficulty} (must be one of {sorted(DIFFICULTY_LEVELS)})"
            )
        if self.reach not in REACH_LEVELS:
            raise ValueError(f"Invalid reach: {self.reach} (must be one of {sorted(REACH_LEVELS)})")


@dataclass
class GameStats:
    """Cumulative statistics for one game."""

    moves: int = 0  # Settled player moves (chain steps excluded)
    capture_chains: list[int] = field(default_factory=list)  # Hunters captured per chain
    camping_removals: int = 0
    triangle_formations: int = 0
    rescues: int = 0


@dataclass
class GameState:
    """Main game state container.

    Mutated only by the TurnEngine. The planner works on deep copies.
    """

    board: Board
    evader: Piece
    hunters: list[Piece]
    config: GameConfig = field(default_factory=GameConfig)
    turn: Turn = Turn.EVADER
    hunters_acted: set[int] = field(default_factory=set)  # Hunter indices
    winner: Winner | None = None
    winning_hunters: list[int] | None = None  # Indices of the winning triangle
    history: TurnHistory = field(default_factory=TurnHistory)
    stats: GameStats = field(default_factory=GameStats)

    def __post_init__(self):
        """Validate piece roles."""
        if not self.evader.is_evader:
            raise ValueError(f"Piece {self.evader.id} is not an evader")
        if not self.hunters:
            raise ValueError("hunters cannot be empty")
        for hunter in self.hunters:
            if not hunter.is_hunter:
                raise ValueError(f"Piece {hunter.id} is not a hunter")

    @property
    def all_pieces(self) -> list[Piece]:
        return [self.evader, *self.hunters]

    def hunter_index(self, piece: Piece) -> int | None:
        """Index of `piece` in the hunter list, by identity."""
        for i, hunter in enumerate(self.hunters):
            if hunter is piece:
                return i
        return None
