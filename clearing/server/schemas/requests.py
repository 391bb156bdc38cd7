"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field

from ...utils.constants import DEFAULT_DIFFICULTY, DEFAULT_REACH


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    difficulty: int = Field(default=DEFAULT_DIFFICULTY, ge=1, le=5, description="Tiger size tier (1-5)")
    reach: int = Field(default=DEFAULT_REACH, ge=1, le=3, description="Tiger reach tier (1-3)")
    evaderAi: bool = Field(  # noqa: N815
        default=True, description="Computer-controlled tiger (False: two-player mode)"
    )
    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")


class PointRequest(BaseModel):
    """A board coordinate, e.g. where the pointer went down."""

    x: float
    y: float


class MoveRequest(BaseModel):
    """Move a piece toward a target point."""

    pieceId: str = Field(description="'E' for the tiger, 'H0'..'H4' for hunters")  # noqa: N815
    x: float
    y: float


class AdvanceRequest(BaseModel):
    """Drive the engine clock forward."""

    now: float = Field(allow_inf_nan=False, description="Caller timestamp in milliseconds")


class LoadRequest(BaseModel):
    """Replace the game with a saved blob."""

    blob: str
