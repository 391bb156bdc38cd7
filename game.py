#!/usr/bin/env python3
"""Tiger Clearing - Main entry point.

A turn-based hunt on a circular board: the tiger (computer) pounces on
hunters, the hunters (you) try to surround it with a triangle.
"""

import argparse
import logging
import sys

from clearing.engine.turn_engine import TurnEngine
from clearing.interface.command_parser import (
    CommandKind,
    CommandParseError,
    CommandParser,
    ErrorType,
)
from clearing.interface.display import DisplayManager
from clearing.models.game import GameConfig
from clearing.utils.constants import DIFFICULTY_LEVELS, MOVE_DURATION_MS, REACH_LEVELS
from clearing.utils.geometry import Vector2
from clearing.utils.rng import GameRNG
from clearing.utils.serialization import load_game_blob, save_game


class GameOrchestrator:
    """Runs the text command loop and drives the engine clock."""

    def __init__(self, engine: TurnEngine, input_fn=input):
        """Initialize game orchestrator.

        Args:
            engine: Engine holding the game to play
            input_fn: Source of command lines (input() by default)
        """
        self.engine = engine
        self.input_fn = input_fn
        self.display = DisplayManager()
        self.parser = CommandParser(len(engine.state.hunters))

    def settle(self) -> None:
        """Advance the virtual clock until nothing is resolving."""
        while self.engine.advance_time(self.engine.clock + MOVE_DURATION_MS):
            pass

    def run(self) -> TurnEngine:
        """Main game loop. Returns when the game ends or the player quits."""
        self.settle()
        self.display.show_state(self.engine)

        while self.engine.state.winner is None:
            try:
                line = self.input_fn("hunters> ")
            except EOFError:
                break

            try:
                command = self.parser.parse(line)
            except CommandParseError as e:
                print(f"❌ {e.message}")
                if e.error_type == ErrorType.UNKNOWN_COMMAND:
                    print("Type 'help' for the list of commands.")
                continue

            if command.kind is CommandKind.QUIT:
                break
            self.handle(command)

        if self.engine.state.winner is not None:
            self.display.show_state(self.engine)
        return self.engine

    def handle(self, command) -> None:
        """Apply one parsed command."""
        engine = self.engine
        if command.kind is CommandKind.HELP:
            self.display.show_help()
        elif command.kind is CommandKind.STATUS:
            self.display.show_state(engine)
        elif command.kind is CommandKind.RESET:
            engine.reset()
            self.settle()
            self.display.show_state(engine)
        elif command.kind is CommandKind.SAVE:
            path = save_game(engine.state, command.path)
            print(f"Game saved to {path}")
        elif command.kind is CommandKind.LOAD:
            try:
                blob = load_game_blob(command.path)
            except FileNotFoundError:
                print(f"❌ File {command.path} not found.")
                return
            if engine.deserialize(blob):
                self.settle()
                self.display.show_state(engine)
            else:
                print(f"❌ {command.path} is not a valid saved game.")
        elif command.kind is CommandKind.MOVE:
            hunter = engine.state.hunters[command.hunter]
            if not engine.submit_move(hunter, Vector2(command.x, command.y)):
                print(f"❌ Hunter {command.hunter} cannot move now.")
                return
            self.settle()
            self.display.show_state(engine)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Tiger Clearing - surround the tiger before it pounces on your hunters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # New game, default difficulty
  %(prog)s --difficulty 4 --reach 3 # Bigger tiger with a longer pounce
  %(prog)s --seed 7                 # Reproducible tiger decisions
  %(prog)s --load savegame.json     # Load saved game
        """,
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        choices=sorted(DIFFICULTY_LEVELS),
        default=GameConfig().difficulty,
        help="Tiger size tier: "
        + ", ".join(f"{k}={v['name']}" for k, v in DIFFICULTY_LEVELS.items()),
    )
    parser.add_argument(
        "--reach",
        type=int,
        choices=sorted(REACH_LEVELS),
        default=GameConfig().reach,
        help="Tiger reach tier: " + ", ".join(f"{k}={v['name']}" for k, v in REACH_LEVELS.items()),
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the tiger")
    parser.add_argument("--load", type=str, metavar="FILE", help="Load game from JSON file")
    parser.add_argument(
        "--save", type=str, metavar="FILE", help="Save game to JSON file after completion"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    engine = TurnEngine(
        GameConfig(difficulty=args.difficulty, reach=args.reach),
        rng=GameRNG(args.seed),
    )

    if args.load:
        print(f"Loading game from {args.load}...")
        try:
            blob = load_game_blob(args.load)
        except FileNotFoundError:
            print(f"Error: File {args.load} not found.")
            sys.exit(1)
        if not engine.deserialize(blob):
            print(f"Error: {args.load} is not a valid saved game.")
            sys.exit(1)

    orchestrator = GameOrchestrator(engine)
    orchestrator.run()

    if args.save:
        print(f"\nSaving game to {args.save}...")
        try:
            path = save_game(engine.state, args.save)
            print(f"Game saved to {path}")
        except OSError as e:
            print(f"Error saving game: {e}")


if __name__ == "__main__":
    main()
