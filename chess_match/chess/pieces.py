"""Defines the chess pieces and the layout they start the game in"""

from dataclasses import dataclass, replace
from typing import Self

from chess_match.chess.square import FILES, Square
from chess_match.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# (back rank, pawn rank) per color
STARTING_RANKS: dict[Color, tuple[int, int]] = {
    Color.WHITE: (1, 2),
    Color.BLACK: (8, 7),
}


@dataclass(frozen=True)
class Piece:
    """
    A piece keeps the id it was created with for the whole game.
    Moving returns a new Piece at the new square, the old value is never changed.
    """

    id: str
    type: PieceType
    color: Color
    position: Square

    @classmethod
    def create(cls, piece_type: PieceType, color: Color, position: Square) -> Self:
        """New piece with an id derived from where it was created, ex. 'white-pawn-a2'"""
        piece_id = f"{color}-{piece_type}-{position.to_algebraic()}"
        return cls(piece_id, piece_type, color, position)

    @classmethod
    def from_fen(cls, character: str, position: Square) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls.create(piece_type, color, position)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def moved_to(self, square: Square) -> Self:
        return replace(self, position=square)


def starting_pieces() -> list[Piece]:
    """The 32 pieces of the standard opening layout: 8 pawns + back rank set per side."""
    pieces: list[Piece] = []
    for color, (back_rank, pawn_rank) in STARTING_RANKS.items():
        for file, piece_type in zip(FILES, BACK_RANK):
            pieces.append(
                Piece.create(piece_type, color, Square.from_algebraic(f"{file}{back_rank}"))
            )
            pieces.append(
                Piece.create(PieceType.PAWN, color, Square.from_algebraic(f"{file}{pawn_rank}"))
            )
    return pieces
