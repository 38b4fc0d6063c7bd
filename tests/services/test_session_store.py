"""Unit tests for chess_match/services/session_store.py"""

import threading

from chess_match.chess.clock import TimeControl
from chess_match.chess.game import GameState
from chess_match.chess.moves import Move
from chess_match.core.shared_types import Color
from chess_match.services.session_store import MatchSessionStore

PLAYERS = {Color.WHITE: "w", Color.BLACK: "b"}


def test_get_creates_fresh_state(store: MatchSessionStore) -> None:
    assert not store.exists("lobby-1")
    state = store.get("lobby-1")
    assert state == GameState.new_game()
    assert store.exists("lobby-1")


def test_put_replaces_state(store: MatchSessionStore) -> None:
    state = GameState.new_game(TimeControl(minutes=5))
    state = state.apply_move("w", Move.from_request("white-pawn-e2", "e4"), PLAYERS)
    store.put("lobby-1", state)
    assert store.get("lobby-1") == state


def test_matches_are_independent(store: MatchSessionStore) -> None:
    moved = GameState.new_game().apply_move(
        "w", Move.from_request("white-pawn-e2", "e4"), PLAYERS
    )
    store.put("lobby-1", moved)
    assert store.get("lobby-2") == GameState.new_game()
    assert store.get("lobby-1") == moved


def test_delete_is_idempotent(store: MatchSessionStore) -> None:
    store.put("lobby-1", GameState.new_game())
    store.delete("lobby-1")
    assert not store.exists("lobby-1")
    store.delete("lobby-1")
    assert not store.exists("lobby-1")


def test_locked_serialises_same_match(store: MatchSessionStore) -> None:
    """While one request holds the lock of a match, a second one has to wait for it"""
    entered = threading.Event()
    release = threading.Event()
    order: list[str] = []

    def first() -> None:
        with store.locked("lobby-1"):
            entered.set()
            release.wait(timeout=5)
            order.append("first")

    def second() -> None:
        entered.wait(timeout=5)
        with store.locked("lobby-1"):
            order.append("second")

    threads = [threading.Thread(target=first), threading.Thread(target=second)]
    for thread in threads:
        thread.start()
    entered.wait(timeout=5)
    # the lock of another match is free
    with store.locked("lobby-2"):
        order.append("other match")
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert order == ["other match", "first", "second"]


def test_delete_keeps_lock_held(store: MatchSessionStore) -> None:
    """Deleting a match from inside its critical section does not let a waiting request in early"""
    acquired: list[str] = []

    def waiting() -> None:
        with store.locked("lobby-1"):
            acquired.append("waiting")

    with store.locked("lobby-1"):
        store.put("lobby-1", GameState.new_game())
        store.delete("lobby-1")
        thread = threading.Thread(target=waiting)
        thread.start()
        thread.join(timeout=0.2)
        assert acquired == []

    thread.join(timeout=5)
    assert acquired == ["waiting"]
