"""Tests for hunter rescue."""

from clearing.engine.game_setup import create_hunter
from clearing.engine.rescue import apply_rescue, find_rescuable_hunter, rescue_threshold
from clearing.models import Specialization, Status
from clearing.utils import Vector2


def make_pair(mover_specialization, distance_apart):
    mover = create_hunter(0, Vector2(0, 0), mover_specialization)
    downed = create_hunter(1, Vector2(distance_apart, 0), Specialization.STANDARD)
    downed.hunter.status = Status.INCAPACITATED
    return [mover, downed]


def test_default_threshold_is_sum_of_sizes():
    hunters = make_pair(Specialization.STANDARD, 30)
    assert rescue_threshold(hunters[0], hunters[1]) == 30
    assert find_rescuable_hunter(0, hunters) == 1


def test_out_of_default_threshold():
    hunters = make_pair(Specialization.STANDARD, 31)
    assert find_rescuable_hunter(0, hunters) is None


def test_medic_has_longer_rescue_range():
    hunters = make_pair(Specialization.MEDIC, 45)
    assert rescue_threshold(hunters[0], hunters[1]) == 50
    assert find_rescuable_hunter(0, hunters) == 1


def test_eliminated_hunters_cannot_be_rescued():
    hunters = make_pair(Specialization.STANDARD, 10)
    hunters[1].hunter.status = Status.ELIMINATED
    assert find_rescuable_hunter(0, hunters) is None


def test_apply_rescue_restarts_camping_clock():
    hunters = make_pair(Specialization.STANDARD, 10)
    hunters[1].hunter.camping_clock = 3
    apply_rescue(hunters, 1)
    assert hunters[1].status is Status.ACTIVE
    assert hunters[1].hunter.camping_clock == 0
