"""Protocol repository (in memory for a single process, SQL Alchemy when multiple processes need to share matches)"""

from typing import Protocol

from chess_match.core.models import GameModel


class MatchRepository(Protocol):
    """Persistence layer orchestration. Keyed by match id (the lobby id)."""

    def get_match(self, match_id: str) -> GameModel | None:
        """Get the game state of a match, if record exists."""
        ...

    def save_match(self, match_id: str, game: GameModel) -> GameModel:
        """Store the game state, replacing whatever was stored before."""
        ...

    def delete_match(self, match_id: str) -> GameModel | None:
        """Remove a match's record. Returns the removed state, None if there was none."""
        ...

    def clear(self) -> None:
        """Forget every match."""
        ...
