"""Tests for the terminal command parser."""

import pytest

from clearing.interface.command_parser import (
    CommandKind,
    CommandParseError,
    CommandParser,
    ErrorType,
)


@pytest.fixture
def parser():
    return CommandParser(hunter_count=5)


def test_parse_move_with_to(parser):
    command = parser.parse("move h2 to 410 380")
    assert command.kind is CommandKind.MOVE
    assert command.hunter == 2
    assert command.x == 410.0
    assert command.y == 380.0


def test_parse_move_without_prefix_or_to(parser):
    command = parser.parse("MOVE 0 12.5 -3")
    assert command.hunter == 0
    assert (command.x, command.y) == (12.5, -3.0)


@pytest.mark.parametrize(
    "text,kind",
    [
        ("status", CommandKind.STATUS),
        ("st", CommandKind.STATUS),
        ("help", CommandKind.HELP),
        ("?", CommandKind.HELP),
        ("quit", CommandKind.QUIT),
        ("exit", CommandKind.QUIT),
        ("  reset  ", CommandKind.RESET),
    ],
)
def test_simple_commands(parser, text, kind):
    assert parser.parse(text).kind is kind


def test_save_and_load_keep_file_case(parser):
    save = parser.parse("save MyGame.json")
    load = parser.parse("load MyGame.json")
    assert save.kind is CommandKind.SAVE
    assert load.kind is CommandKind.LOAD
    assert save.path == load.path == "MyGame.json"


def test_save_needs_file(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("save")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR


def test_unknown_command(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("attack h1")
    assert exc_info.value.error_type == ErrorType.UNKNOWN_COMMAND
    assert "attack" in exc_info.value.message


def test_empty_command(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("   ")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR


def test_move_missing_coordinate(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("move h1 to 100")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR
    assert "Correct format" in exc_info.value.message


def test_move_bad_coordinates(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("move h1 to abc 100")
    assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR


def test_move_non_finite_coordinates(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("move h1 to nan 100")
    assert exc_info.value.error_type == ErrorType.VALIDATION_ERROR


def test_move_unknown_hunter(parser):
    with pytest.raises(CommandParseError) as exc_info:
        parser.parse("move h7 to 1 1")
    assert exc_info.value.error_type == ErrorType.VALIDATION_ERROR
    assert "0-4" in exc_info.value.message
