"""Implementation of (Match)Repository using a dictionary of game models"""

from copy import deepcopy

from chess_match.core.models import GameModel


class InMemoryMatchRepository:
    """Matches live in the memory of this process only."""

    def __init__(self) -> None:
        self._matches: dict[str, GameModel] = {}

    def get_match(self, match_id: str) -> GameModel | None:
        game = self._matches.get(match_id)
        # hand out copies: nobody should be able to patch a stored record in place
        return deepcopy(game) if game is not None else None

    def save_match(self, match_id: str, game: GameModel) -> GameModel:
        self._matches[match_id] = deepcopy(game)
        return game

    def delete_match(self, match_id: str) -> GameModel | None:
        return self._matches.pop(match_id, None)

    def clear(self) -> None:
        self._matches.clear()
