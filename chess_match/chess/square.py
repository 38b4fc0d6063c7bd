"""
A square on the board

(placed in its own module as multiple other modules need to import it)

There is exactly ONE coordinate system in this package:
* x: 0..7 going west -> east, i.e. files 'a'..'h'
* y: 0..7 going north -> south, i.e. rank 8 is y=0 (black's back rank) and rank 1 is y=7 (white's back rank)

`from_algebraic()` and `to_algebraic()` are the only conversion between the two notations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from chess_match.core.exceptions import InvalidRequestError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)

FILES = "abcdefgh"


@dataclass(frozen=True, order=True)
class Square:
    x: int
    y: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0,0), 'h1' to (7,7)"""
        if len(sq) != 2 or sq[0] not in FILES or sq[1] not in "12345678":
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")

        x = FILES.index(sq[0])
        y = BOARD_DIMENSIONS[1] - int(sq[1])
        square = cls(x, y)
        if not square.is_within_bounds():
            raise InvalidRequestError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        return f"{FILES[self.x]}{BOARD_DIMENSIONS[1] - self.y}"

    @property
    def rank(self) -> int:
        """The chess rank (1-8) this square lies on."""
        return BOARD_DIMENSIONS[1] - self.y

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])

    def offset(self, dx: int, dy: int) -> Square:
        """May step off the board: check `is_within_bounds()` before using the result"""
        return Square(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return self.to_algebraic() if self.is_within_bounds() else f"({self.x}, {self.y})"


def all_squares() -> Iterator[Square]:
    """All 64 squares, a8 first, h1 last."""
    for y in range(BOARD_DIMENSIONS[1]):
        for x in range(BOARD_DIMENSIONS[0]):
            yield Square(x, y)
