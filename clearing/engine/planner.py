"""Move search for the computer-controlled evader.

Samples headings evenly around the evader at full strike range, simulates the
capture chain each landing point would trigger, and keeps the best score:

    score = chain length + AI_CENTER_BIAS * closeness to center + jitter

Jitter keeps the evader from cycling between the same two points when no
capture is available.
"""

import logging
import math
from dataclasses import dataclass

from ..models.game import GameState
from ..utils.constants import AI_CENTER_BIAS, AI_JITTER, AI_SAMPLES
from ..utils.geometry import Vector2
from ..utils.rng import GameRNG
from .capture import simulate_capture_chain

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """One sampled destination and how it scored."""

    position: Vector2
    chain_length: int
    score: float


class EvaderPlanner:
    """Greedy one-turn lookahead over sampled destinations."""

    def __init__(
        self,
        rng: GameRNG,
        samples: int = AI_SAMPLES,
        center_bias: float = AI_CENTER_BIAS,
        jitter: float = AI_JITTER,
    ):
        if samples < 1:
            raise ValueError(f"Invalid samples: {samples} (must be >= 1)")
        self.rng = rng
        self.samples = samples
        self.center_bias = center_bias
        self.jitter = jitter

    def candidate_positions(self, state: GameState) -> list[Vector2]:
        """Landing points at full strike range, clamped into the clearing."""
        evader = state.evader
        strike_range = evader.evader.strike_range
        step = (math.pi * 2) / self.samples
        return [
            state.board.clamp_to_inner(
                Vector2.from_angle(evader.position, i * step, strike_range), inset=evader.size
            )
            for i in range(self.samples)
        ]

    def evaluate(self, state: GameState) -> list[Candidate]:
        """Score every sampled destination without touching `state`."""
        evader = state.evader
        board = state.board
        candidates = []
        for position in self.candidate_positions(state):
            chain = simulate_capture_chain(
                position,
                evader.size,
                evader.evader.strike_range,
                state.hunters,
                board,
                self.rng,
            )
            closeness = 1 - position.distance_to(board.center) / board.inner_radius
            score = chain.length + self.center_bias * closeness
            if self.jitter > 0:
                score += self.rng.uniform(0, self.jitter)
            candidates.append(Candidate(position=position, chain_length=chain.length, score=score))
            logger.debug(
                f"Candidate ({position.x:.1f}, {position.y:.1f}): "
                f"chain={chain.length}, score={score:.3f}"
            )
        return candidates

    def choose_move(self, state: GameState) -> Vector2:
        """Return the highest-scoring destination; earlier samples win ties."""
        candidates = self.evaluate(state)
        best = candidates[0]
        for candidate in candidates[1:]:
            if candidate.score > best.score:
                best = candidate
        logger.info(
            f"Evader AI evaluated {len(candidates)} moves, best chain={best.chain_length} "
            f"at ({best.position.x:.1f}, {best.position.y:.1f})"
        )
        return best.position
