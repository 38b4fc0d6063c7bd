"""
Custom exceptions.

Every error a request can run into is a subclass of GameError, so the API layer can catch
that one type and turn it into a structured response. None of them is raised after stored state
has been touched.
"""

from typing import Any


class GameError(Exception):
    """Base exception for everything the chess-match layers raise on purpose."""

    code: str = "GameError"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{key}={value}" for key, value in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation, used as the body of error responses."""
        return {
            "code": self.code,
            "message": self.message,
            "context": {key: str(value) for key, value in self.context.items()},
        }


# --- Request validation ---
class InvalidRequestError(GameError):
    code = "InvalidRequest"


class InvalidTimeControlError(GameError):
    code = "InvalidTimeControl"


# --- Match lookup ---
class GameNotFoundError(GameError):
    code = "GameNotFound"


class PlayerNotFoundError(GameError):
    """The requesting identity has no color binding in this match."""

    code = "PlayerNotFound"


class InvalidPlayerOrColorError(GameError):
    """A player tried to act on behalf of the other color (e.g. run the opponent's clock)."""

    code = "InvalidPlayerOrColor"


# --- Move application ---
class NotYourTurnError(GameError):
    code = "NotYourTurn"


class PieceNotFoundError(GameError):
    code = "PieceNotFound"


class CannotMoveOpponentPieceError(GameError):
    code = "CannotMoveOpponentPiece"


class IllegalMoveError(GameError):
    """Move fails the occupancy / geometry rules."""

    code = "InvalidMove"


class GameOverError(GameError):
    """The match already reached a terminal condition."""

    code = "GameOver"


# --- Clock ---
class TimeControlNotInitializedError(GameError):
    code = "TimeControlNotInitialized"


# --- Internal consistency / persistence ---
class GameStateError(GameError):
    """A game state that breaks the board invariants (shared squares, duplicate ids, unknown values)."""

    code = "GameStateError"


class RepositoryError(GameError):
    code = "RepositoryError"
