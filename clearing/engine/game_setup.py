"""Initial piece placement.

This module builds a fresh GameState:
1. The evader at the board center, sized by the difficulty tier
2. The hunter party evenly spaced around the middle of the outer band
"""

import logging
import math

from ..models.board import Board
from ..models.game import GameConfig, GameState
from ..models.piece import EvaderTraits, HunterTraits, Piece, Specialization
from ..utils.constants import (
    BORDERLANDS_WIDTH,
    CLEARING_RADIUS,
    DEFAULT_CAMPING_TOLERANCE,
    DIFFICULTY_LEVELS,
    HAND_SPAN,
    HUNTER_PARTY,
    HUNTER_RADIUS,
    HUNTER_SPECIALS,
    REACH_LEVELS,
)
from ..utils.geometry import Vector2

logger = logging.getLogger(__name__)


def create_hunter(index: int, position: Vector2, specialization: Specialization) -> Piece:
    """Build a hunter with the capabilities of its specialization.

    Args:
        index: Position in the hunter list (used for the piece id)
        position: Starting position
        specialization: Which HUNTER_SPECIALS entry to apply

    Returns:
        Active hunter piece
    """
    special = HUNTER_SPECIALS[specialization.value]
    tolerance = (
        None
        if special.get("immune_to_camping", False)
        else special.get("camping_tolerance", DEFAULT_CAMPING_TOLERANCE)
    )
    traits = HunterTraits(
        specialization=specialization,
        rescue_range=special.get("rescue_range"),
        camping_tolerance=tolerance,
        can_act_after_rescuing=special.get("can_act_after_rescuing", False),
        can_act_after_being_rescued=special.get("can_act_after_being_rescued", False),
    )
    return Piece(
        id=f"H{index}",
        position=position,
        size=HUNTER_RADIUS,
        movement_range=HAND_SPAN * special["move_multiplier"],
        traits=traits,
    )


def create_evader(position: Vector2, size: float, reach_multiplier: float = 1.0) -> Piece:
    """Build the evader; its movement range equals its strike range."""
    strike_range = HAND_SPAN * reach_multiplier
    return Piece(
        id="E",
        position=position,
        size=size,
        movement_range=strike_range,
        traits=EvaderTraits(strike_range=strike_range),
    )


def evader_size_for(difficulty: int, hunter_count: int = len(HUNTER_PARTY)) -> float:
    """Evader radius: total hunter footprint scaled by the difficulty multiplier."""
    multiplier = DIFFICULTY_LEVELS[difficulty]["multiplier"]
    return hunter_count * HUNTER_RADIUS * multiplier


def create_game(config: GameConfig | None = None) -> GameState:
    """Create the opening position for a new game.

    Args:
        config: Difficulty/reach tiers and control mode (defaults if None)

    Returns:
        GameState with the evader to move first
    """
    config = config or GameConfig()
    center = Vector2(*config.center)
    board = Board(center=center, inner_radius=CLEARING_RADIUS, band_width=BORDERLANDS_WIDTH)

    angle_step = (math.pi * 2) / len(HUNTER_PARTY)
    start_radius = CLEARING_RADIUS + BORDERLANDS_WIDTH / 2
    hunters = [
        create_hunter(i, Vector2.from_angle(center, i * angle_step, start_radius), Specialization(name))
        for i, name in enumerate(HUNTER_PARTY)
    ]

    evader = create_evader(
        center,
        evader_size_for(config.difficulty, len(hunters)),
        REACH_LEVELS[config.reach]["multiplier"],
    )

    logger.info(
        f"New game: difficulty={DIFFICULTY_LEVELS[config.difficulty]['name']}, "
        f"reach={REACH_LEVELS[config.reach]['name']}, evader radius={evader.size:.0f}, "
        f"evader_ai={config.evader_ai}"
    )
    return GameState(board=board, evader=evader, hunters=hunters, config=config)
