"""Victory condition checking.

This module handles:
1. Evader victory: every hunter incapacitated or eliminated
2. Hunters' victory: three active hunters in the clearing, each within
   hand span of the evader, with the evader inside their triangle
"""

from dataclasses import dataclass
from itertools import combinations

from ..models.board import Board
from ..models.game import GameState, Winner
from ..models.piece import Piece
from ..utils.constants import HAND_SPAN
from ..utils.geometry import is_point_in_triangle


@dataclass
class VictoryResult:
    """Outcome of the hunters' victory check.

    Attributes:
        won: True if a surrounding triangle exists
        hunters: Indices of the first winning triple, in increasing order
    """

    won: bool
    hunters: tuple[int, int, int] | None = None


def check_evader_victory(hunters: list[Piece]) -> bool:
    """True iff no hunter is Active."""
    return all(not hunter.is_active for hunter in hunters)


def check_hunter_victory(
    evader: Piece, hunters: list[Piece], board: Board, reach: float = HAND_SPAN
) -> VictoryResult:
    """Search hunter triples in increasing index order for a surrounding triangle.

    Args:
        evader: The evader
        hunters: All hunters
        board: Board geometry
        reach: Max distance from the evader for each triangle corner

    Returns:
        VictoryResult; the triple is the first match in enumeration order
    """
    candidates = [
        i
        for i, hunter in enumerate(hunters)
        if hunter.is_active and board.in_inner_zone(hunter.position)
    ]
    if len(candidates) < 3:
        return VictoryResult(won=False)

    target = evader.position
    for triple in combinations(candidates, 3):
        corners = tuple(hunters[i].position for i in triple)
        if any(target.distance_to(corner) > reach for corner in corners):
            continue
        if is_point_in_triangle(target, corners):
            return VictoryResult(won=True, hunters=triple)

    return VictoryResult(won=False)


def check_victory(state: GameState) -> bool:
    """Set state.winner if either side has won.

    The hunters' triangle is checked first. Returns True if the game has a winner.
    """
    if state.winner is not None:
        return True

    result = check_hunter_victory(state.evader, state.hunters, state.board)
    if result.won:
        state.winner = Winner.HUNTERS
        state.winning_hunters = list(result.hunters)
        state.stats.triangle_formations += 1
        return True

    if check_evader_victory(state.hunters):
        state.winner = Winner.EVADER
        return True

    return False
