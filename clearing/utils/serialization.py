"""Game state serialization to/from JSON.

The blob is self-contained: board, pieces, turn, the bounded turn history and
cumulative statistics. Loading validates the blob with pydantic before any
dataclass is built, so a malformed save never reaches the live game.
"""

import json
import math
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    Field,
    FiniteFloat,
    NonNegativeInt,
    PositiveFloat,
    PositiveInt,
    model_validator,
)

from ..models.board import Board
from ..models.game import GameConfig, GameState, GameStats, Turn, Winner
from ..models.history import TurnHistory, TurnSnapshot
from ..models.piece import EvaderTraits, HunterTraits, Piece, Specialization, Status
from .constants import HISTORY_CAPACITY
from .geometry import Vector2

SAVE_VERSION = 1
POSITION_SLACK = 1e-6  # Float error left by clamping onto a circle


# ========== Validation Models ==========


class PointModel(BaseModel):
    x: FiniteFloat
    y: FiniteFloat


class BoardModel(BaseModel):
    center: PointModel
    inner_radius: PositiveFloat
    band_width: FiniteFloat = Field(ge=0)


class ConfigModel(BaseModel):
    difficulty: int
    reach: int
    evader_ai: bool
    center: PointModel


class EvaderModel(BaseModel):
    id: str
    position: PointModel
    size: PositiveFloat
    movement_range: PositiveFloat
    strike_range: PositiveFloat


class HunterModel(BaseModel):
    id: str
    position: PointModel
    size: PositiveFloat
    movement_range: PositiveFloat
    specialization: Specialization
    status: Status
    rescue_range: PositiveFloat | None = None
    camping_tolerance: PositiveInt | None = None
    can_act_after_rescuing: bool = False
    can_act_after_being_rescued: bool = False
    camping_clock: NonNegativeInt = 0
    has_acted: bool = False
    action_order: PositiveInt | None = None


class SnapshotModel(BaseModel):
    positions: list[PointModel]
    in_outer_band: list[bool]


class StatsModel(BaseModel):
    moves: NonNegativeInt = 0
    capture_chains: list[PositiveInt] = Field(default_factory=list)
    camping_removals: NonNegativeInt = 0
    triangle_formations: NonNegativeInt = 0
    rescues: NonNegativeInt = 0


class SaveModel(BaseModel):
    """Top-level save blob."""

    version: Literal[1]
    config: ConfigModel
    board: BoardModel
    evader: EvaderModel
    hunters: list[HunterModel] = Field(min_length=1)
    turn: Turn
    hunters_acted: list[NonNegativeInt] = Field(default_factory=list)
    winner: Winner | None = None
    winning_hunters: list[NonNegativeInt] | None = None
    history: list[SnapshotModel] = Field(default_factory=list, max_length=HISTORY_CAPACITY)
    stats: StatsModel = Field(default_factory=StatsModel)

    @model_validator(mode="after")
    def check_consistency(self) -> "SaveModel":
        """Cross-field checks: hunter indices, unique piece ids, piece placement."""
        count = len(self.hunters)
        for index in self.hunters_acted:
            if index >= count:
                raise ValueError(f"hunters_acted index {index} out of range ({count} hunters)")
        if self.winning_hunters is not None:
            if len(self.winning_hunters) != 3 or any(i >= count for i in self.winning_hunters):
                raise ValueError(f"Invalid winning_hunters: {self.winning_hunters}")
        for snapshot in self.history:
            if len(snapshot.positions) != count or len(snapshot.in_outer_band) != count:
                raise ValueError("History snapshot does not match the hunter count")

        ids = [self.evader.id, *(h.id for h in self.hunters)]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate piece ids: {ids}")

        board = self.board
        # Chain steps can end on a captured hunter at the clearing edge
        evader_limit = board.inner_radius + POSITION_SLACK
        if _distance_from(self.evader.position, board.center) > evader_limit:
            raise ValueError(f"Evader {self.evader.id} is outside the clearing")
        hunter_limit = board.inner_radius + board.band_width + POSITION_SLACK
        for hunter in self.hunters:
            if _distance_from(hunter.position, board.center) > hunter_limit:
                raise ValueError(f"Hunter {hunter.id} is off the board")
        return self


def _distance_from(point: PointModel, center: PointModel) -> float:
    return math.hypot(point.x - center.x, point.y - center.y)


# ========== Public API ==========


def serialize_state(state: GameState) -> str:
    """Convert a GameState into a JSON blob."""
    return json.dumps(_serialize_game(state))


def deserialize_state(blob: str | bytes) -> GameState:
    """Reconstruct a GameState from a JSON blob.

    Raises:
        ValueError: If the blob is not valid JSON or fails validation
            (pydantic.ValidationError and json.JSONDecodeError are both
            ValueError subclasses)
    """
    data = SaveModel.model_validate_json(blob)
    return _deserialize_game(data)


def save_game(state: GameState, filepath: str) -> Path:
    """Save game state to a JSON file.

    Args:
        state: Game state to save
        filepath: Path to save file (created in the state/ directory if relative)

    Returns:
        Path that was written
    """
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path.cwd() / "state"
        state_dir.mkdir(exist_ok=True)
        path = state_dir / filepath

    path.write_text(serialize_state(state))
    return path


def load_game_blob(filepath: str) -> str:
    """Read a saved game blob from a JSON file.

    The blob is validated when it is handed to deserialize_state (or
    TurnEngine.deserialize).

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path = Path(filepath)
    if not path.is_absolute():
        path = Path.cwd() / "state" / filepath

    return path.read_text()


# ========== Dict Builders ==========


def _serialize_point(point: Vector2) -> dict[str, float]:
    return {"x": point.x, "y": point.y}


def _serialize_game(state: GameState) -> dict[str, Any]:
    """Convert GameState to a JSON-compatible dictionary."""
    config = state.config
    return {
        "version": SAVE_VERSION,
        "config": {
            "difficulty": config.difficulty,
            "reach": config.reach,
            "evader_ai": config.evader_ai,
            "center": {"x": config.center[0], "y": config.center[1]},
        },
        "board": {
            "center": _serialize_point(state.board.center),
            "inner_radius": state.board.inner_radius,
            "band_width": state.board.band_width,
        },
        "evader": _serialize_evader(state.evader),
        "hunters": [_serialize_hunter(h) for h in state.hunters],
        "turn": state.turn.value,
        "hunters_acted": sorted(state.hunters_acted),
        "winner": state.winner.value if state.winner else None,
        "winning_hunters": state.winning_hunters,
        "history": [
            {
                "positions": [_serialize_point(p) for p in snapshot.positions],
                "in_outer_band": list(snapshot.in_outer_band),
            }
            for snapshot in state.history
        ],
        "stats": {
            "moves": state.stats.moves,
            "capture_chains": list(state.stats.capture_chains),
            "camping_removals": state.stats.camping_removals,
            "triangle_formations": state.stats.triangle_formations,
            "rescues": state.stats.rescues,
        },
    }


def _serialize_evader(evader: Piece) -> dict[str, Any]:
    """Convert the evader to a dictionary."""
    return {
        "id": evader.id,
        "position": _serialize_point(evader.position),
        "size": evader.size,
        "movement_range": evader.movement_range,
        "strike_range": evader.evader.strike_range,
    }


def _serialize_hunter(hunter: Piece) -> dict[str, Any]:
    """Convert a hunter to a dictionary."""
    traits = hunter.hunter
    return {
        "id": hunter.id,
        "position": _serialize_point(hunter.position),
        "size": hunter.size,
        "movement_range": hunter.movement_range,
        "specialization": traits.specialization.value,
        "status": traits.status.value,
        "rescue_range": traits.rescue_range,
        "camping_tolerance": traits.camping_tolerance,
        "can_act_after_rescuing": traits.can_act_after_rescuing,
        "can_act_after_being_rescued": traits.can_act_after_being_rescued,
        "camping_clock": traits.camping_clock,
        "has_acted": traits.has_acted,
        "action_order": traits.action_order,
    }


def _point(model: PointModel) -> Vector2:
    return Vector2(model.x, model.y)


def _deserialize_game(data: SaveModel) -> GameState:
    """Build the dataclasses from a validated save model.

    Dataclass validation (__post_init__) may still raise ValueError.
    """
    config = GameConfig(
        difficulty=data.config.difficulty,
        reach=data.config.reach,
        evader_ai=data.config.evader_ai,
        center=(data.config.center.x, data.config.center.y),
    )
    board = Board(
        center=_point(data.board.center),
        inner_radius=data.board.inner_radius,
        band_width=data.board.band_width,
    )
    evader = Piece(
        id=data.evader.id,
        position=_point(data.evader.position),
        size=data.evader.size,
        movement_range=data.evader.movement_range,
        traits=EvaderTraits(strike_range=data.evader.strike_range),
    )
    hunters = [_deserialize_hunter(h) for h in data.hunters]
    history = TurnHistory(
        TurnSnapshot(
            positions=tuple(_point(p) for p in snapshot.positions),
            in_outer_band=tuple(snapshot.in_outer_band),
        )
        for snapshot in data.history
    )
    stats = GameStats(
        moves=data.stats.moves,
        capture_chains=list(data.stats.capture_chains),
        camping_removals=data.stats.camping_removals,
        triangle_formations=data.stats.triangle_formations,
        rescues=data.stats.rescues,
    )
    return GameState(
        board=board,
        evader=evader,
        hunters=hunters,
        config=config,
        turn=data.turn,
        hunters_acted=set(data.hunters_acted),
        winner=data.winner,
        winning_hunters=list(data.winning_hunters) if data.winning_hunters is not None else None,
        history=history,
        stats=stats,
    )


def _deserialize_hunter(data: HunterModel) -> Piece:
    """Reconstruct a hunter from its validated model."""
    return Piece(
        id=data.id,
        position=_point(data.position),
        size=data.size,
        movement_range=data.movement_range,
        traits=HunterTraits(
            specialization=data.specialization,
            status=data.status,
            rescue_range=data.rescue_range,
            camping_tolerance=data.camping_tolerance,
            can_act_after_rescuing=data.can_act_after_rescuing,
            can_act_after_being_rescued=data.can_act_after_being_rescued,
            camping_clock=data.camping_clock,
            has_acted=data.has_acted,
            action_order=data.action_order,
        ),
    )
