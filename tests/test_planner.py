"""Tests for the computer evader's move search."""

import pytest

from clearing.engine.game_setup import create_evader, create_hunter
from clearing.engine.planner import EvaderPlanner
from clearing.models import Board, GameState, Specialization, Status
from clearing.utils import GameRNG, Vector2


def create_planner_game(evader_pos, *hunter_positions):
    board = Board(center=Vector2(0, 0), inner_radius=300, band_width=150)
    hunters = [
        create_hunter(i, Vector2(*pos), Specialization.STANDARD)
        for i, pos in enumerate(hunter_positions)
    ]
    return GameState(board=board, evader=create_evader(Vector2(*evader_pos), 30), hunters=hunters)


def test_candidates_at_full_strike_range():
    state = create_planner_game((0, 0), (0, 400))
    planner = EvaderPlanner(GameRNG(1))
    positions = planner.candidate_positions(state)
    assert len(positions) == 12
    for position in positions:
        assert position.distance_to(Vector2(0, 0)) == pytest.approx(150)


def test_candidates_clamped_inside_clearing():
    state = create_planner_game((250, 0), (0, 400))
    for position in EvaderPlanner(GameRNG(1)).candidate_positions(state):
        assert position.distance_to(state.board.center) <= 270 + 1e-9


def test_prefers_capture():
    state = create_planner_game((0, 0), (150, 0), (-280, 0), (0, -280))
    target = EvaderPlanner(GameRNG(5)).choose_move(state)
    assert target.x == pytest.approx(150)
    assert target.y == pytest.approx(0, abs=1e-9)


def test_prefers_center_without_capture():
    state = create_planner_game((100, 0), (0, 400), (0, -400), (-400, 0))
    planner = EvaderPlanner(GameRNG(5), jitter=0)
    target = planner.choose_move(state)
    assert target.x == pytest.approx(-50)
    assert target.y == pytest.approx(0, abs=1e-6)


def test_always_returns_a_move():
    state = create_planner_game((0, 0), (0, 400), (400, 0))
    target = EvaderPlanner(GameRNG(9)).choose_move(state)
    assert target.is_finite()
    assert state.board.in_inner_zone(target)


def test_does_not_mutate_state():
    state = create_planner_game((0, 0), (150, 0), (200, 50), (0, -280))
    before = [(h.position, h.status) for h in state.hunters]

    EvaderPlanner(GameRNG(5)).choose_move(state)

    assert [(h.position, h.status) for h in state.hunters] == before
    assert all(h.status is Status.ACTIVE for h in state.hunters)
    assert state.evader.position == Vector2(0, 0)


def test_evaluate_reports_chain_length():
    state = create_planner_game((0, 0), (150, 0), (-280, 0))
    candidates = EvaderPlanner(GameRNG(5)).evaluate(state)
    assert candidates[0].chain_length == 1
    assert max(c.chain_length for c in candidates[1:]) == 0


def test_invalid_samples():
    with pytest.raises(ValueError, match="Invalid samples"):
        EvaderPlanner(GameRNG(1), samples=0)
