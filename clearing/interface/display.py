"""Plain-text status display for terminal play."""

from ..engine.turn_engine import TurnEngine
from ..models.board import Zone
from ..models.game import Turn
from ..models.piece import Status
from ..utils.constants import HUNTER_SPECIALS

ZONE_LABELS = {
    Zone.INNER: "clearing",
    Zone.OUTER_BAND: "borderlands",
    Zone.OUTSIDE: "outside",
}

WARNING_LABELS = {0: "", 1: " [camping!]", 2: " [CAMPING - removed next turn]"}


class DisplayManager:
    """Formats engine state as text. Contains no rules logic."""

    def format_state(self, engine: TurnEngine) -> str:
        """Build the status block shown before each command prompt."""
        state = engine.state
        board = state.board
        evader = state.evader
        lines = []

        if state.winner is not None:
            lines.append(f"=== {state.winner.value} WINS! ===")
        elif engine.ai_thinking:
            lines.append("Tiger is thinking...")
        elif state.turn is Turn.HUNTERS:
            remaining = len(engine.hunters_yet_to_act())
            lines.append(f"HUNTERS' turn ({remaining} moves left)")
        else:
            lines.append("TIGER's turn")

        lines.append(
            f"Tiger  at ({evader.position.x:6.1f}, {evader.position.y:6.1f})  "
            f"radius {evader.size:.0f}, reach {evader.evader.strike_range:.0f}"
        )
        for i, hunter in enumerate(state.hunters):
            traits = hunter.hunter
            symbol = HUNTER_SPECIALS[traits.specialization.value]["symbol"] or "-"
            if traits.status is Status.ACTIVE:
                status = "moved" if traits.has_acted else "ready"
            else:
                status = traits.status.value
            marks = ""
            if i in engine.threatened_hunters:
                marks += " [threatened]"
            if state.winning_hunters and i in state.winning_hunters:
                marks += " [victory]"
            marks += WARNING_LABELS[engine.get_camping_warning(i)]
            lines.append(
                f"H{i} {symbol} at ({hunter.position.x:6.1f}, {hunter.position.y:6.1f})  "
                f"{ZONE_LABELS[board.classify(hunter.position)]:<11} {status}{marks}"
            )

        stats = state.stats
        lines.append(
            f"Moves {stats.moves} | chains {stats.capture_chains} | "
            f"camping removals {stats.camping_removals} | rescues {stats.rescues}"
        )
        return "\n".join(lines)

    def show_state(self, engine: TurnEngine) -> None:
        print(self.format_state(engine))

    def show_help(self) -> None:
        print(
            "Commands:\n"
            "  move <hunter> [to] <x> <y>   move a hunter (e.g. move h2 to 410 380)\n"
            "  status                       show the board\n"
            "  save <file> / load <file>    save or load the game\n"
            "  reset                        start over\n"
            "  quit                         leave the game"
        )
