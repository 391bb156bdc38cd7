"""Capture chain resolution.

This module handles:
1. Detecting the hunter the evader landed on (edge-to-edge overlap)
2. Finding the next hunter to pounce on from the evader's position
3. Equidistant choice points (ties within EQUIDISTANT_TOLERANCE)
4. Whole-chain simulation on copied pieces for the evader planner

The TurnEngine drives a real chain one timed step at a time using the same
step functions, so a simulated chain and a played chain agree.
"""

import copy
from dataclasses import dataclass, field

from ..models.board import Board
from ..models.piece import Piece, Status
from ..utils.constants import EQUIDISTANT_TOLERANCE
from ..utils.geometry import Vector2
from ..utils.rng import GameRNG


@dataclass
class CaptureChain:
    """Record of one chain: hunter indices in capture order."""

    captured: list[int] = field(default_factory=list)
    evader_won: bool = False

    @property
    def length(self) -> int:
        return len(self.captured)


def find_landed_hunter(position: Vector2, size: float, hunters: list[Piece]) -> int | None:
    """Return the index of the first Active hunter overlapping the evader.

    Args:
        position: Evader's landing position
        size: Evader's collision radius
        hunters: All hunters

    Returns:
        Hunter index, or None if the evader landed clear of every hunter
    """
    for i, hunter in enumerate(hunters):
        if not hunter.is_active:
            continue
        if position.distance_to(hunter.position) <= size + hunter.size:
            return i
    return None


def hunters_in_strike_range(
    from_pos: Vector2, hunters: list[Piece], board: Board, strike_range: float
) -> list[int]:
    """Active hunters inside the clearing within strike range, nearest first.

    Ties in distance keep hunter index order.
    """
    in_range = [
        i
        for i, hunter in enumerate(hunters)
        if hunter.is_active
        and board.in_inner_zone(hunter.position)
        and from_pos.distance_to(hunter.position) <= strike_range
    ]
    return sorted(in_range, key=lambda i: from_pos.distance_to(hunters[i].position))


def equidistant_hunters(from_pos: Vector2, hunters: list[Piece], candidates: list[int]) -> list[int]:
    """Candidates tied with the nearest one within EQUIDISTANT_TOLERANCE.

    Args:
        from_pos: Position the evader pounces from
        hunters: All hunters
        candidates: Indices sorted nearest first (see hunters_in_strike_range)

    Returns:
        The tied group, nearest first. More than one entry is a choice point.
    """
    if not candidates:
        return []
    nearest = from_pos.distance_to(hunters[candidates[0]].position)
    return [
        i
        for i in candidates
        if abs(from_pos.distance_to(hunters[i].position) - nearest) < EQUIDISTANT_TOLERANCE
    ]


def choose_next_target(
    from_pos: Vector2,
    hunters: list[Piece],
    board: Board,
    strike_range: float,
    rng: GameRNG | None = None,
) -> int | None:
    """Pick the next hunter to pounce on, or None if the chain is over.

    With an rng (computer-controlled evader), an equidistant tie is broken
    uniformly at random; without one the nearest-by-index hunter is taken.
    """
    candidates = hunters_in_strike_range(from_pos, hunters, board, strike_range)
    if not candidates:
        return None
    tied = equidistant_hunters(from_pos, hunters, candidates)
    if rng is not None and len(tied) > 1:
        return rng.choice(tied)
    return candidates[0]


def all_hunters_down(hunters: list[Piece]) -> bool:
    return all(not hunter.is_active for hunter in hunters)


def simulate_capture_chain(
    landing: Vector2,
    evader_size: float,
    strike_range: float,
    hunters: list[Piece],
    board: Board,
    rng: GameRNG | None = None,
) -> CaptureChain:
    """Resolve a whole chain instantly on deep copies of the hunters.

    The caller's pieces are never mutated.

    Args:
        landing: Where the evader would land
        evader_size: Evader's collision radius
        strike_range: Evader's strike range
        hunters: Current hunters (copied, not modified)
        board: Board geometry
        rng: Random source for equidistant ties (None: nearest first)

    Returns:
        CaptureChain with the hunters that would be captured
    """
    hunters = copy.deepcopy(hunters)
    chain = CaptureChain()

    landed = find_landed_hunter(landing, evader_size, hunters)
    if landed is None:
        return chain

    _capture(hunters, landed, chain)
    position = landing

    while not all_hunters_down(hunters):
        target = choose_next_target(position, hunters, board, strike_range, rng)
        if target is None:
            break
        _capture(hunters, target, chain)
        position = hunters[target].position

    chain.evader_won = all_hunters_down(hunters)
    return chain


def _capture(hunters: list[Piece], index: int, chain: CaptureChain) -> None:
    hunters[index].hunter.status = Status.INCAPACITATED
    chain.captured.append(index)
