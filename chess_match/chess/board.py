"""The Board answers occupancy questions: which pieces are alive, and what stands on a given square"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from chess_match.chess.pieces import Piece, starting_pieces
from chess_match.chess.square import BOARD_DIMENSIONS, Square
from chess_match.core.exceptions import GameStateError, PieceNotFoundError
from chess_match.core.shared_types import Color

EMPTY_FEN = "/".join(["8"] * BOARD_DIMENSIONS[1])
STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass(frozen=True)
class Board:
    """
    Arena of live pieces, keyed by piece id.
    ---

    A Board is never changed in place. `move_piece()` hands back a new Board,
    so a rejected move can never leave a half-updated position behind.
    """

    pieces: dict[str, Piece] = field(default_factory=dict)

    def __post_init__(self) -> None:
        occupied: dict[Square, str] = {}
        for piece_id, piece in self.pieces.items():
            if piece_id != piece.id:
                raise GameStateError(f"Piece stored under {piece_id!r} has id {piece.id!r}.")
            if not piece.position.is_within_bounds():
                raise GameStateError(f"Piece {piece.id!r} is off the board: {piece.position}")
            if piece.position in occupied:
                raise GameStateError(
                    f"Pieces {occupied[piece.position]!r} and {piece.id!r} share square {piece.position}."
                )
            occupied[piece.position] = piece.id

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Self:
        arena: dict[str, Piece] = {}
        for piece in pieces:
            if piece.id in arena:
                raise GameStateError(f"Duplicate piece id: {piece.id!r}")
            arena[piece.id] = piece
        return cls(arena)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_pieces(starting_pieces())

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (y=0), read from the a-file to the h-file
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        Each piece gets the id it would have been created with on that square.
        """
        pieces: list[Piece] = []
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise GameStateError(f"FEN placement needs {BOARD_DIMENSIONS[1]} ranks: {fen_str!r}")

        # FEN string is read from top rank (8th) to bottom rank (1st), which is exactly the direction y counts in.
        for y, fen_one_rank in enumerate(fen_by_ranks):
            x = 0
            for character in fen_one_rank:
                if x >= BOARD_DIMENSIONS[0]:
                    raise GameStateError(f"FEN rank {fen_one_rank!r} runs past the h-file.")
                if character.isalpha():
                    pieces.append(Piece.from_fen(character, Square(x, y)))
                    x += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    x += int(character)
            if x != BOARD_DIMENSIONS[0]:
                raise GameStateError(f"FEN rank {fen_one_rank!r} does not cover {BOARD_DIMENSIONS[0]} files.")
        return cls.from_pieces(pieces)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(y) for y in range(BOARD_DIMENSIONS[1]))

    def _rank_to_fen(self, y: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for x in range(BOARD_DIMENSIONS[0]):
            piece = self.piece_at(Square(x, y))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- OCCUPANCY QUERIES ---
    def piece_at(self, square: Square) -> Optional[Piece]:
        """Linear scan. There are never more than 32 pieces, so no index is kept."""
        return next(
            (piece for piece in self.pieces.values() if piece.position == square), None
        )

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def piece(self, piece_id: str) -> Piece:
        if piece_id not in self.pieces:
            raise PieceNotFoundError(f"No piece with id {piece_id!r} on the board.")
        return self.pieces[piece_id]

    def find_piece(self, piece_id: str) -> Optional[Piece]:
        return self.pieces.get(piece_id)

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self.pieces.values() if piece.color == color]

    # --- UPDATES ---
    def move_piece(self, piece_id: str, target: Square) -> tuple[Self, Optional[Piece]]:
        """
        Relocate a piece. Whatever stood on the target square is taken off the board.

        Returns the new board and the captured piece (if any).
        NOTE: no rules are checked here. That is up to the legality engine / GameState.
        """
        moving_piece = self.piece(piece_id)
        captured = self.piece_at(target)
        arena = {
            key: piece
            for key, piece in self.pieces.items()
            if captured is None or key != captured.id
        }
        arena[piece_id] = moving_piece.moved_to(target)
        return type(self)(arena), captured
