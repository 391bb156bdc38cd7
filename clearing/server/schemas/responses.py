"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    busy: bool
    turn: str
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    state: dict


class SelectResponse(BaseModel):
    """Piece selectable at a point, if any."""

    pieceId: str | None = None  # noqa: N815


class MoveResponse(BaseModel):
    """Response after submitting a move."""

    accepted: bool
    state: dict


class AdvanceResponse(BaseModel):
    """Response after advancing the clock."""

    busy: bool
    winner: str | None = None
    state: dict


class SaveResponse(BaseModel):
    blob: str


class LoadResponse(BaseModel):
    loaded: bool
    state: dict
