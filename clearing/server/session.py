"""Game session management for browser play."""

import logging
import uuid
from dataclasses import dataclass

from ..engine.turn_engine import TurnEngine
from ..models.game import GameConfig
from ..models.piece import Piece
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One game and the engine driving it."""

    id: str
    engine: TurnEngine
    seed: int

    def find_piece(self, piece_id: str) -> Piece | None:
        for piece in self.engine.state.all_pieces:
            if piece.id == piece_id:
                return piece
        return None

    def get_state(self) -> dict:
        """Serialize what a renderer needs: positions, statuses, warnings.

        Positions are the interpolated draw positions at the engine clock.
        """
        engine = self.engine
        state = engine.state
        now = engine.clock
        evader = state.evader

        def point(p):
            return {"x": p.x, "y": p.y}

        return {
            "board": {
                "center": point(state.board.center),
                "innerRadius": state.board.inner_radius,
                "outerRadius": state.board.outer_radius,
            },
            "turn": state.turn.value,
            "busy": engine.is_busy,
            "aiThinking": engine.ai_thinking,
            "winner": state.winner.value if state.winner else None,
            "winningHunters": state.winning_hunters,
            "evader": {
                "id": evader.id,
                "position": point(evader.display_position(now)),
                "radius": evader.size,
                "strikeRange": evader.evader.strike_range,
            },
            "hunters": [
                {
                    "id": hunter.id,
                    "position": point(hunter.display_position(now)),
                    "radius": hunter.size,
                    "specialization": hunter.hunter.specialization.value,
                    "status": hunter.status.value,
                    "hasActed": hunter.hunter.has_acted,
                    "actionOrder": hunter.hunter.action_order,
                    "campingWarning": engine.get_camping_warning(i),
                    "threatened": i in engine.threatened_hunters,
                }
                for i, hunter in enumerate(state.hunters)
            ],
            "stats": {
                "moves": state.stats.moves,
                "captureChains": state.stats.capture_chains,
                "campingRemovals": state.stats.camping_removals,
                "triangleFormations": state.stats.triangle_formations,
                "rescues": state.stats.rescues,
            },
        }


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; sessions are lost on restart.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        difficulty: int,
        reach: int,
        evader_ai: bool = True,
        seed: int | None = None,
    ) -> GameSession:
        """Create a new game session.

        Args:
            difficulty: Tiger size tier
            reach: Tiger reach tier
            evader_ai: Computer-controlled tiger
            seed: Optional RNG seed for determinism

        Returns:
            Newly created GameSession

        Raises:
            ValueError: If a tier is unknown
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        config = GameConfig(difficulty=difficulty, reach=reach, evader_ai=evader_ai)
        engine = TurnEngine(config, rng=GameRNG(seed))
        session = GameSession(id=game_id, engine=engine, seed=seed)
        self.sessions[game_id] = session

        logger.info(
            f"Created game {game_id}: difficulty={difficulty}, reach={reach}, "
            f"evader_ai={evader_ai}, seed={seed}"
        )
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID, or None."""
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game session. Returns False if not found."""
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
