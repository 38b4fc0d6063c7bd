"""Unit tests for chess_match/db/memory_repository.py"""

from chess_match.chess.game import GameState
from chess_match.db.memory_repository import InMemoryMatchRepository


def test_save_and_get() -> None:
    repo = InMemoryMatchRepository()
    model = GameState.new_game().to_model()
    repo.save_match("lobby-1", model)
    assert repo.get_match("lobby-1") == model
    assert repo.get_match("lobby-2") is None


def test_stored_record_cannot_be_patched() -> None:
    """Changing a model you got back does not change what is stored"""
    repo = InMemoryMatchRepository()
    repo.save_match("lobby-1", GameState.new_game().to_model())

    fetched = repo.get_match("lobby-1")
    assert fetched is not None
    fetched.active_player = "black"
    fetched.pieces.clear()

    stored = repo.get_match("lobby-1")
    assert stored is not None
    assert stored.active_player == "white"
    assert len(stored.pieces) == 32


def test_delete_and_clear() -> None:
    repo = InMemoryMatchRepository()
    model = GameState.new_game().to_model()
    repo.save_match("lobby-1", model)
    repo.save_match("lobby-2", model)

    assert repo.delete_match("lobby-1") == model
    assert repo.delete_match("lobby-1") is None

    repo.clear()
    assert repo.get_match("lobby-2") is None
