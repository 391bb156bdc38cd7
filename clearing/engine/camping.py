"""Camping penalty.

This module handles:
1. Recording end-of-turn hunter positions into the bounded TurnHistory
2. Eliminating hunters that lingered in the outer band too many turns
3. The early-warning level shown to players

The penalty only applies while at least one Active hunter is inside the
clearing. A party that keeps every active hunter in the band is never
penalized.
"""

import logging

from ..models.game import GameState
from ..models.piece import Piece, Status
from ..models.history import TurnSnapshot

logger = logging.getLogger(__name__)


def record_turn_positions(state: GameState) -> TurnSnapshot:
    """Append the current hunter positions to the history and tick camping clocks."""
    snapshot = TurnSnapshot(
        positions=tuple(h.position for h in state.hunters),
        in_outer_band=tuple(state.board.in_outer_band(h.position) for h in state.hunters),
    )
    state.history.append(snapshot)
    for hunter in state.hunters:
        traits = hunter.hunter
        traits.camping_clock = min(traits.camping_clock + 1, state.history.capacity)
    return snapshot


def camping_count(state: GameState, index: int) -> int:
    """Outer-band snapshots for a hunter since its last rescue, within its window.

    Args:
        state: Current game state
        index: Hunter index

    Returns:
        Number of counted snapshots that placed the hunter in the outer band
        (0 for camping-immune hunters)
    """
    traits = state.hunters[index].hunter
    if traits.camping_tolerance is None:
        return 0
    window = min(state.history.capacity, traits.camping_tolerance, traits.camping_clock)
    return sum(1 for snapshot in state.history.recent(window) if snapshot.in_outer_band[index])


def band_streak(state: GameState, index: int) -> int:
    """Consecutive outer-band snapshots for a hunter, newest backwards, since its last rescue."""
    traits = state.hunters[index].hunter
    window = min(state.history.capacity, traits.camping_clock)
    streak = 0
    for snapshot in reversed(state.history.recent(window)):
        if not snapshot.in_outer_band[index]:
            break
        streak += 1
    return streak


def camping_warning(state: GameState, index: int) -> int:
    """Warning level: 0 none, 1 approaching, 2 elimination next turn.

    Level 2 means one more turn-end in the band reaches the tolerance, which
    needs an unbroken run of band snapshots up to the newest one.
    """
    hunter = state.hunters[index]
    tolerance = hunter.hunter.camping_tolerance
    if tolerance is None or hunter.status is not Status.ACTIVE:
        return 0
    if camping_count(state, index) == 0:
        return 0
    if band_streak(state, index) >= tolerance - 1:
        return 2
    return 1


def any_active_in_clearing(state: GameState) -> bool:
    return any(h.is_active and state.board.in_inner_zone(h.position) for h in state.hunters)


def enforce_camping_penalty(state: GameState) -> list[Piece]:
    """Eliminate Active, non-immune hunters whose camping count reached tolerance.

    Args:
        state: Game state, with this turn's snapshot already recorded

    Returns:
        Hunters eliminated by this check
    """
    if not any_active_in_clearing(state):
        return []

    eliminated = []
    for i, hunter in enumerate(state.hunters):
        traits = hunter.hunter
        if traits.status is not Status.ACTIVE or traits.camping_tolerance is None:
            continue
        if camping_count(state, i) >= traits.camping_tolerance:
            traits.status = Status.ELIMINATED
            state.stats.camping_removals += 1
            eliminated.append(hunter)
            logger.info(f"Hunter {hunter.id} eliminated for camping in the borderlands")
    return eliminated
