"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class Status(StrEnum):
    """Terminal markers. A match that is still being played has no status (None)."""

    WHITE_WINS_ON_TIME = "White wins on time"
    BLACK_WINS_ON_TIME = "Black wins on time"


# NOTE: the side that ran out of time loses, so the status names the opponent
TIMEOUT_STATUS: dict[Color, Status] = {
    Color.WHITE: Status.BLACK_WINS_ON_TIME,
    Color.BLACK: Status.WHITE_WINS_ON_TIME,
}
