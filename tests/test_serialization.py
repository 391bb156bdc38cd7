"""Tests for game state serialization."""

import json

import pytest

from clearing.engine.game_setup import create_evader, create_game, create_hunter
from clearing.engine.turn_engine import TurnEngine
from clearing.models import Board, GameConfig, GameState, Specialization, Status, Turn
from clearing.utils import GameRNG, Vector2
from clearing.utils.serialization import (
    deserialize_state,
    load_game_blob,
    save_game,
    serialize_state,
)


def create_chain_engine():
    """Two-player engine whose evader can land on H0 and chain onto H1."""
    config = GameConfig(evader_ai=False, center=(0.0, 0.0))
    board = Board(center=Vector2(0, 0), inner_radius=300, band_width=150)
    hunters = [
        create_hunter(0, Vector2(100, 0), Specialization.SCOUT),
        create_hunter(1, Vector2(200, 0), Specialization.MEDIC),
        create_hunter(2, Vector2(-250, 0), Specialization.VETERAN),
        create_hunter(3, Vector2(0, 400), Specialization.STANDARD),
    ]
    state = GameState(
        board=board, evader=create_evader(Vector2(0, 0), 30), hunters=hunters, config=config
    )
    engine = TurnEngine(config, rng=GameRNG(11))
    engine.state = state
    return engine


def create_played_engine():
    """Two-player engine after one capture chain (H0, H1 down)."""
    engine = create_chain_engine()
    engine.submit_move(engine.state.evader, Vector2(90, 0))
    engine.advance_time(10_000)
    return engine


def mutated_blob(engine, mutate):
    data = json.loads(engine.serialize())
    mutate(data)
    return json.dumps(data)


class TestRoundTrip:
    def test_new_game(self):
        state = create_game()
        assert deserialize_state(serialize_state(state)) == state

    def test_game_in_progress(self):
        engine = create_played_engine()
        state = engine.state
        assert state.turn is Turn.HUNTERS
        assert state.stats.capture_chains == [2]

        restored = TurnEngine(GameConfig(evader_ai=False), rng=GameRNG(1))
        assert restored.deserialize(engine.serialize())

        assert restored.state == state
        assert restored.state.hunters[1].status is Status.INCAPACITATED
        assert restored.state.hunters[2].hunter.immune_to_camping

    def test_history_and_acted_flags_survive(self):
        engine = create_played_engine()
        state = engine.state
        engine.submit_move(state.hunters[2], Vector2(-240, 0))
        engine.advance_time(engine.clock + 300)
        engine.submit_move(state.hunters[3], Vector2(0, 390))
        engine.advance_time(engine.clock + 300)
        assert len(state.history) == 1
        assert state.turn is Turn.EVADER

        restored = deserialize_state(engine.serialize())
        assert restored.history == state.history
        assert restored.hunters[3].hunter.camping_clock == 1

    def test_blob_is_plain_json(self):
        data = json.loads(serialize_state(create_game()))
        assert data["version"] == 1
        assert data["turn"] == "EVADER"
        assert len(data["hunters"]) == 5


class TestLoadIntoEngine:
    def test_mid_move_snapshot_is_the_game_before_the_move(self):
        engine = TurnEngine(GameConfig(evader_ai=False), rng=GameRNG(1))
        center = engine.state.board.center
        engine.submit_move(engine.state.evader, Vector2(450, 520))
        assert engine.is_busy

        restored = TurnEngine(GameConfig(evader_ai=False), rng=GameRNG(1))
        assert restored.deserialize(engine.serialize())
        assert not restored.is_busy
        assert restored.state.evader.position == center
        assert restored.state.evader.move is None
        assert restored.state.turn is Turn.EVADER
        assert restored.state.stats.moves == 0

    def test_hunter_saved_mid_move_moves_only_once(self):
        engine = create_played_engine()
        hunter = engine.state.hunters[3]
        assert engine.submit_move(hunter, Vector2(0, 0))
        assert hunter.position == Vector2(0, 250)
        blob = engine.serialize()

        restored = TurnEngine(GameConfig(evader_ai=False), rng=GameRNG(1))
        assert restored.deserialize(blob)
        saved = restored.state.hunters[3]
        assert saved.position == Vector2(0, 400)
        assert not saved.hunter.has_acted
        assert restored.hunters_yet_to_act() == [2, 3]

        assert restored.submit_move(saved, Vector2(0, 0))
        restored.advance_time(restored.clock + 300)
        assert saved.position == Vector2(0, 250)
        assert not restored.submit_move(saved, Vector2(0, 100))

    def test_snapshot_during_capture_chain_has_no_captures(self):
        engine = create_chain_engine()
        engine.submit_move(engine.state.evader, Vector2(90, 0))
        engine.advance_time(300)
        assert engine.pending is not None
        assert engine.state.hunters[1].status is Status.INCAPACITATED

        restored = deserialize_state(engine.serialize())
        assert all(h.status is Status.ACTIVE for h in restored.hunters)
        assert restored.evader.position == Vector2(0, 0)
        assert restored.turn is Turn.EVADER
        assert restored.stats.capture_chains == []

        engine.advance_time(10_000)
        settled = deserialize_state(engine.serialize())
        assert settled.stats.capture_chains == [2]
        assert settled.turn is Turn.HUNTERS

    def test_loading_ai_game_schedules_evader(self):
        blob = serialize_state(create_game())
        engine = TurnEngine(GameConfig(evader_ai=False), rng=GameRNG(1))
        assert engine.deserialize(blob)
        assert engine.ai_thinking


class TestMalformed:
    """A bad blob is rejected and leaves the live game untouched."""

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.update(version=2),
            lambda d: d.pop("hunters"),
            lambda d: d.update(hunters=[]),
            lambda d: d.update(turn="TIGER"),
            lambda d: d.update(hunters_acted=[9]),
            lambda d: d["hunters"][0].update(size=-1),
            lambda d: d["hunters"][0].update(status="asleep"),
            lambda d: d["evader"]["position"].update(x="abc"),
            lambda d: d["config"].update(difficulty=9),
            lambda d: d.update(winning_hunters=[0, 1]),
            lambda d: d.update(history=[d["history"][0]] * 4),
            lambda d: d["history"][0]["in_outer_band"].pop(),
            lambda d: d["hunters"][1].update(id="H0"),
            lambda d: d["evader"].update(id="H2"),
            lambda d: d["evader"].update(position={"x": 301.0, "y": 0.0}),
            lambda d: d["hunters"][3].update(position={"x": 0.0, "y": 451.0}),
        ],
    )
    def test_rejected(self, mutate):
        engine = create_played_engine()
        state = engine.state
        engine.submit_move(state.hunters[2], Vector2(-240, 0))
        engine.advance_time(engine.clock + 300)
        engine.submit_move(state.hunters[3], Vector2(0, 390))
        engine.advance_time(engine.clock + 300)

        before = engine.serialize()
        assert not engine.deserialize(mutated_blob(engine, mutate))
        assert engine.serialize() == before
        assert engine.state is state

    @pytest.mark.parametrize("blob", ["", "not json", "[]", "{}", "null"])
    def test_garbage(self, blob):
        engine = create_played_engine()
        before = engine.serialize()
        assert not engine.deserialize(blob)
        assert engine.serialize() == before

    def test_evader_on_clearing_edge_is_accepted(self):
        engine = create_played_engine()
        blob = mutated_blob(engine, lambda d: d["evader"].update(position={"x": 300.0, "y": 0.0}))
        assert deserialize_state(blob).evader.position == Vector2(300.0, 0.0)

    def test_deserialize_state_raises_value_error(self):
        with pytest.raises(ValueError):
            deserialize_state("{}")


class TestFiles:
    def test_save_and_load_absolute_path(self, tmp_path):
        state = create_game()
        path = save_game(state, str(tmp_path / "game.json"))
        assert path == tmp_path / "game.json"
        assert load_game_blob(str(path)) == serialize_state(state)

    def test_relative_path_goes_to_state_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        state = create_game()
        path = save_game(state, "game.json")
        assert path == tmp_path / "state" / "game.json"
        assert deserialize_state(load_game_blob("game.json")) == state

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_game_blob(str(tmp_path / "missing.json"))
