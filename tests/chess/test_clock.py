"""Unit tests for chess_match/chess/clock.py (and the clock part of GameState)"""

import pytest

from chess_match.chess.clock import TimeControl, TimeRemaining
from chess_match.chess.game import GameState
from chess_match.core.exceptions import (
    InvalidTimeControlError,
    TimeControlNotInitializedError,
)
from chess_match.core.shared_types import Color, Status


# --- TIME CONTROL ---
@pytest.mark.parametrize("minutes, increment", [(1, 0), (60, 60), (5, 3), (10, 0)])
def test_valid_time_control(minutes: int, increment: int) -> None:
    time_control = TimeControl(minutes, increment)
    assert time_control.initial_seconds == minutes * 60


@pytest.mark.parametrize("minutes, increment", [(0, 0), (61, 0), (-5, 0), (5, -1), (5, 61)])
def test_invalid_time_control(minutes: int, increment: int) -> None:
    with pytest.raises(InvalidTimeControlError):
        TimeControl(minutes, increment)


# --- TIME REMAINING ---
def test_time_remaining_from_time_control() -> None:
    assert TimeRemaining.from_time_control(TimeControl(3)) == TimeRemaining(180, 180)


def test_decrement_only_touches_one_side() -> None:
    remaining = TimeRemaining(10, 10)
    assert remaining.decrement(Color.WHITE) == TimeRemaining(9, 10)
    assert remaining.decrement(Color.BLACK) == TimeRemaining(10, 9)
    # values are never changed in place
    assert remaining == TimeRemaining(10, 10)


def test_decrement_stops_at_zero() -> None:
    assert TimeRemaining(0, 5).decrement(Color.WHITE) == TimeRemaining(0, 5)


def test_flagged() -> None:
    assert TimeRemaining(5, 5).flagged() == []
    assert TimeRemaining(0, 5).flagged() == [Color.WHITE]


# --- TICKS ON A GAME ---
def test_tick_without_clock() -> None:
    with pytest.raises(TimeControlNotInitializedError):
        GameState.new_game().tick(Color.WHITE)


def test_tick_decrements_by_one_second() -> None:
    state = GameState.new_game(TimeControl(minutes=1, increment=10))
    state = state.tick(Color.WHITE)
    # the increment is NOT handed out per tick
    assert state.time_remaining == TimeRemaining(59, 60)
    assert state.status is None

    state = state.tick(Color.BLACK).tick(Color.BLACK)
    assert state.time_remaining == TimeRemaining(59, 58)


def test_running_out_of_time() -> None:
    state = GameState.new_game(TimeControl(minutes=1))
    for _ in range(59):
        state = state.tick(Color.BLACK)
    assert state.status is None
    assert state.time_remaining is not None
    assert state.time_remaining.black == 1

    state = state.tick(Color.BLACK)
    assert state.time_remaining == TimeRemaining(60, 0)
    assert state.status == Status.WHITE_WINS_ON_TIME
    assert state.winner == Color.WHITE
    assert state.is_over


def test_ticks_after_timeout_change_nothing() -> None:
    state = GameState.new_game(TimeControl(minutes=1))
    for _ in range(60):
        state = state.tick(Color.WHITE)
    assert state.status == Status.BLACK_WINS_ON_TIME

    assert state.tick(Color.WHITE) == state
    assert state.tick(Color.BLACK) == state


def test_tick_leaves_board_alone() -> None:
    state = GameState.new_game(TimeControl(minutes=1))
    ticked = state.tick(Color.WHITE)
    assert ticked.board == state.board
    assert ticked.active_player == state.active_player
