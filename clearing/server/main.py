"""FastAPI server for Tiger Clearing.

Exposes the engine's public operations to a browser front end, which does
its own rendering and input mapping and polls /advance from its frame loop.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..models.game import GameConfig
from ..utils.geometry import Vector2
from .schemas.requests import (
    AdvanceRequest,
    CreateGameRequest,
    LoadRequest,
    MoveRequest,
    PointRequest,
)
from .schemas.responses import (
    AdvanceResponse,
    CreateGameResponse,
    GameStateResponse,
    LoadResponse,
    MoveResponse,
    SaveResponse,
    SelectResponse,
)
from .session import GameSession, GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Tiger Clearing server starting...")
    yield
    logger.info("Tiger Clearing server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Tiger Clearing API",
    description="Web API for playing Tiger Clearing in the browser",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Tiger Clearing",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game.

    Example:
        POST /api/games
        {"difficulty": 3, "reach": 2, "evaderAi": true, "seed": 42}
    """
    try:
        session = sessions.create_session(
            difficulty=request.difficulty,
            reach=request.reach,
            evader_ai=request.evaderAi,
            seed=request.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CreateGameResponse(gameId=session.id, seed=session.seed, state=session.get_state())


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state."""
    session = _get_session(game_id)
    state = session.engine.state
    return GameStateResponse(
        gameId=game_id,
        busy=session.engine.is_busy,
        turn=state.turn.value,
        winner=state.winner.value if state.winner else None,
        state=session.get_state(),
    )


@app.post("/api/games/{game_id}/select", response_model=SelectResponse)
async def select_piece(game_id: str, request: PointRequest):
    """Which piece (if any) the current player may pick up at a point."""
    session = _get_session(game_id)
    piece = session.engine.select_piece_at(Vector2(request.x, request.y))
    return SelectResponse(pieceId=piece.id if piece else None)


@app.post("/api/games/{game_id}/moves", response_model=MoveResponse)
async def submit_move(game_id: str, request: MoveRequest):
    """Submit a move. Rejected moves (busy, game over, not your piece) return accepted=false.

    Example:
        POST /api/games/game-abc123/moves
        {"pieceId": "H2", "x": 410, "y": 380}
    """
    session = _get_session(game_id)
    piece = session.find_piece(request.pieceId)
    if piece is None:
        raise HTTPException(status_code=404, detail=f"Piece {request.pieceId} not found")

    accepted = session.engine.submit_move(piece, Vector2(request.x, request.y))
    return MoveResponse(accepted=accepted, state=session.get_state())


@app.post("/api/games/{game_id}/advance", response_model=AdvanceResponse)
async def advance_time(game_id: str, request: AdvanceRequest):
    """Drive open moves, capture chains and the computer tiger forward to `now`."""
    session = _get_session(game_id)
    busy = session.engine.advance_time(request.now)
    winner = session.engine.state.winner
    return AdvanceResponse(
        busy=busy, winner=winner.value if winner else None, state=session.get_state()
    )


@app.post("/api/games/{game_id}/reset", response_model=GameStateResponse)
async def reset_game(game_id: str, request: CreateGameRequest | None = None):
    """Start over, optionally with new tiers."""
    session = _get_session(game_id)
    config = None
    if request is not None:
        try:
            config = GameConfig(
                difficulty=request.difficulty, reach=request.reach, evader_ai=request.evaderAi
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    session.engine.reset(config)
    return await get_game_state(game_id)


@app.get("/api/games/{game_id}/save", response_model=SaveResponse)
async def save_game(game_id: str):
    """Snapshot the game as a JSON blob for the client's key-value store."""
    session = _get_session(game_id)
    return SaveResponse(blob=session.engine.serialize())


@app.post("/api/games/{game_id}/load", response_model=LoadResponse)
async def load_game(game_id: str, request: LoadRequest):
    """Replace the game with a saved blob; a malformed blob leaves it untouched."""
    session = _get_session(game_id)
    loaded = session.engine.deserialize(request.blob)
    return LoadResponse(loaded=loaded, state=session.get_state())


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    else:
        raise HTTPException(status_code=404, detail="Game not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
