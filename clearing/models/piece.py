"""Piece data model: one evader or one hunter.

A piece carries a role payload (`EvaderTraits` or `HunterTraits`) instead of
being subclassed per role. Rules code dispatches on the payload type.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..utils.geometry import Vector2


class Role(Enum):
    EVADER = "evader"
    HUNTER = "hunter"


class Status(Enum):
    """Hunter status. Eliminated is terminal; Incapacitated can be rescued."""

    ACTIVE = "active"
    INCAPACITATED = "incapacitated"
    ELIMINATED = "eliminated"


class Specialization(Enum):
    SCOUT = "scout"
    VETERAN = "veteran"
    MEDIC = "medic"
    STANDARD = "standard"


@dataclass
class MoveAnimation:
    """An in-progress move that has not visually settled yet.

    The piece's logical position is already `end`; this only gates when the
    move's effects are applied.
    """

    start: Vector2
    end: Vector2
    start_time: float
    duration: float

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def is_complete(self, now: float) -> bool:
        return now >= self.end_time

    def position_at(self, now: float) -> Vector2:
        if self.duration <= 0 or now >= self.end_time:
            return self.end
        t = max(0.0, (now - self.start_time) / self.duration)
        return self.start.lerp(self.end, t)


@dataclass
class EvaderTraits:
    """Evader payload."""

    strike_range: float  # Max distance to initiate or continue a capture


@dataclass
class HunterTraits:
    """Hunter payload: status, specialization and turn-local bookkeeping."""

    specialization: Specialization = Specialization.STANDARD
    status: Status = Status.ACTIVE
    rescue_range: float | None = None  # None: sum of both hunters' sizes
    camping_tolerance: int | None = 3  # None: immune to camping
    can_act_after_rescuing: bool = False
    can_act_after_being_rescued: bool = False
    camping_clock: int = 0  # Snapshots recorded since the last rescue
    has_acted: bool = False
    action_order: int | None = None

    def __post_init__(self):
        """Validate hunter payload."""
        if self.camping_tolerance is not None and self.camping_tolerance < 1:
            raise ValueError(
                f"Invalid camping_tolerance: {self.camping_tolerance} (must be >= 1 or None)"
            )
        if self.camping_clock < 0:
            raise ValueError(f"Invalid camping_clock: {self.camping_clock} (must be >= 0)")

    @property
    def immune_to_camping(self) -> bool:
        return self.camping_tolerance is None


@dataclass
class Piece:
    """A piece on the board.

    Pieces are never removed from the game; captured and eliminated hunters
    stay in the collection with a status so indices remain stable.
    """

    id: str  # "E" for the evader, "H0".."H4" for hunters
    position: Vector2
    size: float  # Collision radius
    movement_range: float
    traits: EvaderTraits | HunterTraits
    move: MoveAnimation | None = field(default=None, compare=False)

    def __post_init__(self):
        """Validate piece data after initialization."""
        if self.size <= 0:
            raise ValueError(f"Invalid size: {self.size} (must be > 0)")
        if self.movement_range <= 0:
            raise ValueError(f"Invalid movement_range: {self.movement_range} (must be > 0)")

    @property
    def role(self) -> Role:
        match self.traits:
            case EvaderTraits():
                return Role.EVADER
            case HunterTraits():
                return Role.HUNTER
        raise TypeError(f"Unknown piece traits: {self.traits!r}")

    @property
    def is_evader(self) -> bool:
        return isinstance(self.traits, EvaderTraits)

    @property
    def is_hunter(self) -> bool:
        return isinstance(self.traits, HunterTraits)

    @property
    def status(self) -> Status:
        """Hunter status; the evader is always considered active."""
        match self.traits:
            case HunterTraits(status=status):
                return status
            case _:
                return Status.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is Status.ACTIVE

    @property
    def hunter(self) -> HunterTraits:
        """Hunter payload; raises for the evader."""
        if not isinstance(self.traits, HunterTraits):
            raise TypeError(f"Piece {self.id} is not a hunter")
        return self.traits

    @property
    def evader(self) -> EvaderTraits:
        """Evader payload; raises for hunters."""
        if not isinstance(self.traits, EvaderTraits):
            raise TypeError(f"Piece {self.id} is not the evader")
        return self.traits

    def display_position(self, now: float) -> Vector2:
        """Where a renderer should draw the piece at time `now`."""
        if self.move is None:
            return self.position
        return self.move.position_at(now)
