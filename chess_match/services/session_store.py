"""
Match Session Store: one GameState per match id.

The store is an explicit object handed to whoever needs it; there is no module level map of matches.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from chess_match.chess.game import GameState
from chess_match.db.repository import MatchRepository

logger = logging.getLogger(__name__)


class MatchSessionStore:
    """
    Keyed lookup of the current GameState of every match.
    ----

    * `get()` creates a fresh game (standard layout, no clock) when the match has no state yet.
    * `put()` replaces the stored state as a whole.
    * `delete()` forgets the match; deleting twice is fine. The lock of the match is kept,
      a request waiting on it must not end up sharing the critical section with a newer one.

    Request handlers wrap their read-modify-write in `locked(match_id)`, so two requests
    for the same match in this process cannot overwrite each other's result.
    NOTE: this does not protect against other processes writing to a shared SQL backend.
    """

    def __init__(self, repository: MatchRepository) -> None:
        self.repo = repository
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def locked(self, match_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(match_id, threading.Lock())
        with lock:
            yield

    def exists(self, match_id: str) -> bool:
        return self.repo.get_match(match_id) is not None

    def get(self, match_id: str) -> GameState:
        model = self.repo.get_match(match_id)
        if model is None:
            logger.info("No state for match %s yet, creating a new game", match_id)
            state = GameState.new_game()
            self.put(match_id, state)
            return state
        return GameState.from_model(model)

    def put(self, match_id: str, state: GameState) -> GameState:
        self.repo.save_match(match_id, state.to_model())
        return state

    def delete(self, match_id: str) -> None:
        removed = self.repo.delete_match(match_id)
        if removed is not None:
            logger.info("Deleted state of match %s", match_id)

    def clear(self) -> None:
        self.repo.clear()
