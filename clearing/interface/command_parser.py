"""Text command parser for human hunters.

Parses commands like "move h2 to 410 380" into Command objects that the
terminal game loop turns into engine calls.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum


class ErrorType(Enum):
    """Classification of command input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"
    VALIDATION_ERROR = "validation_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class CommandKind(Enum):
    MOVE = "move"
    STATUS = "status"
    HELP = "help"
    QUIT = "quit"
    SAVE = "save"
    LOAD = "load"
    RESET = "reset"


@dataclass
class Command:
    """A parsed player command."""

    kind: CommandKind
    hunter: int | None = None  # Hunter index for MOVE
    x: float | None = None
    y: float | None = None
    path: str | None = None  # File for SAVE/LOAD


MOVE_FORMAT = "Correct format: move <hunter> [to] <x> <y>   (e.g. move h2 to 410 380)"

_SIMPLE_COMMANDS = {
    "status": CommandKind.STATUS,
    "st": CommandKind.STATUS,
    "help": CommandKind.HELP,
    "h": CommandKind.HELP,
    "?": CommandKind.HELP,
    "quit": CommandKind.QUIT,
    "exit": CommandKind.QUIT,
    "q": CommandKind.QUIT,
    "reset": CommandKind.RESET,
}

_MOVE_PATTERN = re.compile(r"move\s+h?(\d+)\s+(?:to\s+)?(\S+)\s+(\S+)$")


class CommandParser:
    """Parse text commands into Commands."""

    def __init__(self, hunter_count: int):
        self.hunter_count = hunter_count

    def parse(self, command: str) -> Command:
        """Parse a command string.

        Supported formats:
        - "move <hunter> [to] <x> <y>" (hunter as "2" or "h2")
        - "save <file>", "load <file>"
        - "status", "help", "reset", "quit"

        Raises:
            CommandParseError: If the command is unknown or malformed
        """
        cmd = command.strip().lower()
        if not cmd:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Empty command")

        if cmd in _SIMPLE_COMMANDS:
            return Command(kind=_SIMPLE_COMMANDS[cmd])

        first_word = cmd.split()[0]
        if first_word in ("save", "load"):
            return self._parse_file_command(first_word, command.strip())
        if first_word == "move":
            return self._parse_move(cmd)

        raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{first_word}'")

    def _parse_file_command(self, word: str, original: str) -> Command:
        parts = original.split(maxsplit=1)
        if len(parts) < 2:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, f"Syntax error: {word} needs a file name")
        kind = CommandKind.SAVE if word == "save" else CommandKind.LOAD
        return Command(kind=kind, path=parts[1])

    def _parse_move(self, cmd: str) -> Command:
        match = _MOVE_PATTERN.match(cmd)
        if not match:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Syntax error: invalid move\n{MOVE_FORMAT}"
            )

        hunter = int(match.group(1))
        if not (0 <= hunter < self.hunter_count):
            raise CommandParseError(
                ErrorType.VALIDATION_ERROR,
                f"No hunter {hunter} (hunters are 0-{self.hunter_count - 1})",
            )

        try:
            x = float(match.group(2))
            y = float(match.group(3))
        except ValueError:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Invalid coordinates: '{match.group(2)} {match.group(3)}'\n{MOVE_FORMAT}",
            )
        if not (math.isfinite(x) and math.isfinite(y)):
            raise CommandParseError(ErrorType.VALIDATION_ERROR, "Coordinates must be finite numbers")

        return Command(kind=CommandKind.MOVE, hunter=hunter, x=x, y=y)
