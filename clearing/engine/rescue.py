"""Rescue of incapacitated hunters by a hunter that moves next to them."""

import logging

from ..models.piece import Piece, Status

logger = logging.getLogger(__name__)


def rescue_threshold(mover: Piece, other: Piece) -> float:
    """The mover's rescue range, or the sum of both sizes if it has none."""
    rescue_range = mover.hunter.rescue_range
    if rescue_range is not None:
        return rescue_range
    return mover.size + other.size


def find_rescuable_hunter(mover_index: int, hunters: list[Piece]) -> int | None:
    """Return the first incapacitated hunter within the mover's rescue threshold."""
    mover = hunters[mover_index]
    for i, hunter in enumerate(hunters):
        if i == mover_index or hunter.status is not Status.INCAPACITATED:
            continue
        if mover.position.distance_to(hunter.position) <= rescue_threshold(mover, hunter):
            return i
    return None


def apply_rescue(hunters: list[Piece], rescued_index: int) -> None:
    """Bring a hunter back to Active and restart its camping clock."""
    traits = hunters[rescued_index].hunter
    traits.status = Status.ACTIVE
    traits.camping_clock = 0
    logger.info(f"Hunter {hunters[rescued_index].id} rescued")
