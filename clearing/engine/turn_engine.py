"""Turn engine: the only component that mutates a live GameState.

Command flow:
1. select_piece_at(point) / submit_move(piece, point) validate and open a
   timed move. The piece's logical position changes immediately.
2. advance_time(now) settles open moves whose end time has passed and applies
   their effects: a capture chain after the evader's move, rescue and
   turn-completion after a hunter's move, camping and the hand-off to the
   evader at the end of the hunters' turn.
3. A computer-controlled evader "thinks" for AI_THINK_DELAY_MS on the
   caller's clock, then its planned move is submitted through submit_move.

Every step of a capture chain is its own timed move, so the chain plays out
strictly one step after another. While anything is in flight the engine is
busy and rejects new commands instead of queueing them.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from ..models.game import GameConfig, GameState, Turn, Winner
from ..models.piece import MoveAnimation, Piece, Status
from ..utils.constants import AI_THINK_DELAY_MS, MOVE_DURATION_MS
from ..utils.geometry import Vector2, clamp_displacement
from ..utils.rng import GameRNG
from ..utils.serialization import deserialize_state, serialize_state
from .camping import camping_warning, enforce_camping_penalty, record_turn_positions
from .capture import (
    CaptureChain,
    choose_next_target,
    find_landed_hunter,
    hunters_in_strike_range,
)
from .game_setup import create_game
from .planner import EvaderPlanner
from .rescue import apply_rescue, find_rescuable_hunter
from .victory import check_evader_victory, check_victory

logger = logging.getLogger(__name__)


class StepKind(Enum):
    EVADER_MOVE = "evader_move"
    CHAIN_STEP = "chain_step"
    HUNTER_MOVE = "hunter_move"


@dataclass
class PendingStep:
    """The one move currently waiting to settle."""

    kind: StepKind
    piece: Piece
    hunter_index: int | None = None  # Mover for HUNTER_MOVE, target for CHAIN_STEP


class TurnEngine:
    """Turn state machine for one game.

    Commands issued while the game is over or while the engine is busy are
    no-ops: select_piece_at returns None and submit_move returns False.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: GameRNG | None = None,
        planner: EvaderPlanner | None = None,
        move_duration: float = MOVE_DURATION_MS,
        think_delay: float = AI_THINK_DELAY_MS,
    ):
        """Initialize the engine and start a new game.

        Args:
            config: Game options (defaults if None)
            rng: Random source for equidistant ties and planner jitter
            planner: Evader planner (built on `rng` if None)
            move_duration: Settle time of each move, in caller clock units
            think_delay: How long the computer evader "thinks" before moving
        """
        self.rng = rng or GameRNG()
        self.planner = planner or EvaderPlanner(self.rng)
        self.move_duration = move_duration
        self.think_delay = think_delay
        self.clock = 0.0
        self.reset(config)

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    def reset(self, config: GameConfig | None = None) -> None:
        """Start a new game, keeping the current config if none is given."""
        if config is None and hasattr(self, "state"):
            config = self.state.config
        self.state: GameState = create_game(config)
        self._clear_transient()
        self._schedule_evader_ai()

    @property
    def evader_ai_enabled(self) -> bool:
        return self.state.config.evader_ai

    @property
    def is_busy(self) -> bool:
        """True while a move or chain step is open or the evader is thinking."""
        return self.pending is not None or self.ai_thinking

    def select_piece_at(self, point: Vector2) -> Piece | None:
        """Return the piece the current player may pick up at `point`, if any."""
        if self.state.winner is not None or self.is_busy:
            return None
        point = _as_point(point)
        if point is None:
            return None

        state = self.state
        if state.turn is Turn.EVADER:
            evader = state.evader
            if not self.evader_ai_enabled and point.distance_to(evader.position) <= evader.size:
                return evader
            return None

        for i, hunter in enumerate(state.hunters):
            if self._can_hunter_act(i) and point.distance_to(hunter.position) <= hunter.size:
                return hunter
        return None

    def submit_move(self, piece: Piece, target: Vector2) -> bool:
        """Clamp and commit a move for `piece`.

        The displacement is truncated to the piece's movement range, then the
        destination is pulled back into the legal area for its role (the
        clearing inset by the evader's size, or the whole playable disc for
        hunters).

        Returns:
            True if the move was accepted and is now resolving
        """
        if self.state.winner is not None:
            logger.debug("Move rejected: game is over")
            return False
        if self.is_busy:
            logger.debug("Move rejected: engine is busy")
            return False
        target = _as_point(target)
        if target is None:
            logger.debug("Move rejected: target is not a finite coordinate")
            return False

        state = self.state
        if piece is state.evader and state.turn is Turn.EVADER:
            self.committed_blob = serialize_state(state)
            destination = clamp_displacement(piece.position, target, piece.movement_range)
            destination = state.board.clamp_to_inner(destination, inset=piece.size)
            self._open_move(piece, destination, StepKind.EVADER_MOVE)
            return True

        index = state.hunter_index(piece)
        if index is not None and state.turn is Turn.HUNTERS and self._can_hunter_act(index):
            self.committed_blob = serialize_state(state)
            destination = clamp_displacement(piece.position, target, piece.movement_range)
            destination = state.board.clamp_to_playable(destination)
            self._open_move(piece, destination, StepKind.HUNTER_MOVE, index)
            return True

        logger.debug(f"Move rejected: piece {piece.id} cannot act now")
        return False

    def advance_time(self, now: float) -> bool:
        """Settle every move whose end time is at or before `now`.

        A long jump settles a whole capture chain; each step starts when the
        previous one settled.

        Returns:
            True while something is still resolving (the engine is busy)
        """
        if not math.isfinite(now):
            logger.debug(f"Ignored non-finite timestamp: {now}")
            return self.is_busy

        while True:
            step = self.pending
            if step is not None:
                move = step.piece.move
                if not move.is_complete(now):
                    break
                self.clock = max(self.clock, move.end_time)
                step.piece.move = None
                self.pending = None
                self._settle(step)
                continue

            if self.ai_thinking and now >= self.ai_ready_at:
                self.clock = max(self.clock, self.ai_ready_at)
                self._run_evader_ai()
                continue

            break

        self.clock = max(self.clock, now)
        return self.is_busy

    def hunters_yet_to_act(self) -> list[int]:
        """Indices of hunters that may still move during this hunters' turn."""
        if self.state.turn is not Turn.HUNTERS:
            return []
        return [i for i in range(len(self.state.hunters)) if self._can_hunter_act(i)]

    def get_camping_warning(self, hunter: Piece | int) -> int:
        """Camping warning level for a hunter: 0 none, 1 approaching, 2 imminent."""
        index = hunter if isinstance(hunter, int) else self.state.hunter_index(hunter)
        if index is None:
            return 0
        return camping_warning(self.state, index)

    def serialize(self) -> str:
        """Snapshot of the game as a JSON blob.

        While a move or capture chain is resolving, the snapshot is the game
        as it stood before that move was submitted: the mover has not acted
        and no capture has happened yet.
        """
        if self.pending is not None:
            return self.committed_blob
        return serialize_state(self.state)

    def deserialize(self, blob: str | bytes) -> bool:
        """Replace the live game with a saved one.

        Returns:
            False (leaving the current game untouched) if the blob is malformed
        """
        try:
            state = deserialize_state(blob)
        except (ValueError, TypeError) as e:
            logger.warning(f"Rejected saved game: {e}")
            return False

        self.state = state
        self._clear_transient()
        self._schedule_evader_ai()
        logger.info(f"Loaded game: turn={state.turn.value}, moves={state.stats.moves}")
        return True

    # =========================================================================
    # MOVE LIFECYCLE
    # =========================================================================

    def _clear_transient(self) -> None:
        self.pending: PendingStep | None = None
        self.committed_blob: str | None = None  # Game before the resolving move
        self.chain: CaptureChain | None = None
        self.threatened_hunters: list[int] = []
        self.ai_thinking = False
        self.ai_ready_at: float | None = None

    def _open_move(
        self, piece: Piece, destination: Vector2, kind: StepKind, hunter_index: int | None = None
    ) -> None:
        piece.move = MoveAnimation(
            start=piece.position,
            end=destination,
            start_time=self.clock,
            duration=self.move_duration,
        )
        piece.position = destination
        self.pending = PendingStep(kind=kind, piece=piece, hunter_index=hunter_index)

    def _settle(self, step: PendingStep) -> None:
        match step.kind:
            case StepKind.EVADER_MOVE:
                self._settle_evader_move()
            case StepKind.CHAIN_STEP:
                self._settle_chain_step()
            case StepKind.HUNTER_MOVE:
                self._settle_hunter_move(step.hunter_index)

    # =========================================================================
    # EVADER TURN
    # =========================================================================

    def _settle_evader_move(self) -> None:
        state = self.state
        evader = state.evader
        state.stats.moves += 1

        landed = find_landed_hunter(evader.position, evader.size, state.hunters)
        if landed is None:
            self.threatened_hunters = hunters_in_strike_range(
                evader.position, state.hunters, state.board, evader.evader.strike_range
            )
            if self.threatened_hunters:
                logger.info(f"ROAR! {len(self.threatened_hunters)} hunters within strike range")
            self._end_evader_turn()
            return

        logger.info(f"Evader landed on hunter {state.hunters[landed].id}, starting capture chain")
        self.chain = CaptureChain()
        self._capture(landed)
        if check_evader_victory(state.hunters):
            self._finish_chain()
            return
        self._continue_chain()

    def _settle_chain_step(self) -> None:
        if check_evader_victory(self.state.hunters):
            self._finish_chain()
            return
        self._continue_chain()

    def _continue_chain(self) -> None:
        state = self.state
        evader = state.evader
        rng = self.rng if self.evader_ai_enabled else None
        target = choose_next_target(
            evader.position, state.hunters, state.board, evader.evader.strike_range, rng
        )
        if target is None:
            self._finish_chain()
            return

        self._capture(target)
        self._open_move(evader, state.hunters[target].position, StepKind.CHAIN_STEP, target)

    def _capture(self, index: int) -> None:
        hunter = self.state.hunters[index]
        hunter.hunter.status = Status.INCAPACITATED
        self.chain.captured.append(index)
        logger.info(f"Pounce: hunter {hunter.id} incapacitated")

    def _finish_chain(self) -> None:
        chain = self.chain
        self.chain = None
        chain.evader_won = check_evader_victory(self.state.hunters)
        self.state.stats.capture_chains.append(chain.length)
        logger.info(f"Capture chain ended after {chain.length} hunters")
        self._end_evader_turn()

    def _end_evader_turn(self) -> None:
        state = self.state
        if self._check_victory():
            return
        state.turn = Turn.HUNTERS
        self._reset_hunter_turn()

    # =========================================================================
    # HUNTERS' TURN
    # =========================================================================

    def _can_hunter_act(self, index: int) -> bool:
        hunter = self.state.hunters[index]
        return (
            hunter.is_active
            and not hunter.hunter.has_acted
            and index not in self.state.hunters_acted
        )

    def _mark_acted(self, index: int) -> None:
        hunters = self.state.hunters
        traits = hunters[index].hunter
        traits.has_acted = True
        self.state.hunters_acted.add(index)
        # Unique within the turn, even after a rescuer is unmarked and acts again
        traits.action_order = 1 + max((h.hunter.action_order or 0 for h in hunters), default=0)

    def _unmark_acted(self, index: int) -> None:
        traits = self.state.hunters[index].hunter
        traits.has_acted = False
        traits.action_order = None
        self.state.hunters_acted.discard(index)

    def _reset_hunter_turn(self) -> None:
        self.state.hunters_acted.clear()
        for hunter in self.state.hunters:
            hunter.hunter.has_acted = False
            hunter.hunter.action_order = None

    def _settle_hunter_move(self, index: int) -> None:
        state = self.state
        mover = state.hunters[index]
        state.stats.moves += 1
        self._mark_acted(index)

        rescued = find_rescuable_hunter(index, state.hunters)
        if rescued is not None:
            apply_rescue(state.hunters, rescued)
            state.stats.rescues += 1
            if mover.hunter.can_act_after_rescuing:
                self._unmark_acted(index)
            if not state.hunters[rescued].hunter.can_act_after_being_rescued:
                self._mark_acted(rescued)

        # Recomputed after every move: a rescue changes who still has to act
        if not self.hunters_yet_to_act():
            self._end_hunter_turn()

        if self._check_victory():
            return
        if state.turn is Turn.EVADER:
            self._schedule_evader_ai()

    def _end_hunter_turn(self) -> None:
        state = self.state
        record_turn_positions(state)
        state.turn = Turn.EVADER
        self._reset_hunter_turn()
        self.threatened_hunters = []
        enforce_camping_penalty(state)
        logger.info(f"Hunters' turn complete ({len(state.history)} turns in history)")

    # =========================================================================
    # COMPUTER EVADER
    # =========================================================================

    def _schedule_evader_ai(self) -> None:
        state = self.state
        if not self.evader_ai_enabled or state.winner is not None or state.turn is not Turn.EVADER:
            return
        self.ai_thinking = True
        self.ai_ready_at = self.clock + self.think_delay

    def _run_evader_ai(self) -> None:
        target = self.planner.choose_move(self.state)
        self.ai_thinking = False
        self.ai_ready_at = None
        if not self.submit_move(self.state.evader, target):
            logger.warning("Evader AI move was rejected; passing the turn to the hunters")
            self.state.turn = Turn.HUNTERS
            self._reset_hunter_turn()

    # =========================================================================
    # VICTORY
    # =========================================================================

    def _check_victory(self) -> bool:
        state = self.state
        if not check_victory(state):
            return False
        self.ai_thinking = False
        self.ai_ready_at = None
        if state.winner is Winner.HUNTERS:
            ids = ", ".join(state.hunters[i].id for i in state.winning_hunters)
            logger.info(f"Hunters win: evader surrounded by {ids}")
        else:
            logger.info("Evader wins: every hunter is down")
        return True


def _as_point(point) -> Vector2 | None:
    """Coerce a Vector2 or (x, y) pair; None if it is not a finite coordinate."""
    if isinstance(point, Vector2):
        x, y = point.x, point.y
    else:
        try:
            x, y = point
        except (TypeError, ValueError):
            return None
    try:
        point = Vector2(float(x), float(y))
    except (TypeError, ValueError):
        return None
    return point if point.is_finite() else None
