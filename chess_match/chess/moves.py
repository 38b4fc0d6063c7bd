"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the movement rule for each piece type.

"Legal" in this module means: the move matches the piece's movement geometry and respects occupancy.
There is no notion of check. Castling, en passant and promotion are not part of this rule set.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from chess_match.chess.pieces import Piece
from chess_match.chess.square import Square, all_squares
from chess_match.core.shared_types import Color, PieceType


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    piece_id: str
    target: Square

    @classmethod
    def from_request(cls, piece_id: str, target_position: str) -> Self:
        """Squares arrive in algebraic notation: 'e4'"""
        return cls(piece_id, Square.from_algebraic(target_position))

    def to_dict(self) -> dict[str, str]:
        return {"piece_id": self.piece_id, "target_position": self.target.to_algebraic()}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> Self:
        return cls.from_request(data["piece_id"], data["target_position"])


# --- PATH HELPERS ---
def direction_between(from_square: Square, to_square: Square) -> Vector:
    """Unit step (each component -1, 0 or 1) pointing from one square towards the other"""

    def _sign(value: int) -> int:
        return (value > 0) - (value < 0)

    return _sign(to_square.x - from_square.x), _sign(to_square.y - from_square.y)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    The squares strictly in between two squares that share a file, rank or diagonal.

    Needed for checking if a sliding piece has a clear line of sight to its target.
    """
    delta_x = abs(to_square.x - from_square.x)
    delta_y = abs(to_square.y - from_square.y)
    if not (delta_x == 0 or delta_y == 0 or delta_x == delta_y):
        raise ValueError(
            f"squares_between requires both squares to share a file, rank or diagonal. \n from: {from_square}\n to:{to_square}"
        )

    dx, dy = direction_between(from_square, to_square)
    squares_found: list[Square] = []
    square = from_square.offset(dx, dy)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(dx, dy)
    return squares_found


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    return all(board.is_empty(square) for square in squares_between(from_square, to_square))


def pawn_direction(color: Color) -> int:
    """White moves UP the board, which means towards y=0 (rank 8). Black moves DOWN."""
    return -1 if color == Color.WHITE else 1


# White pawns start on rank 2 (y=6), black pawns on rank 7 (y=1)
PAWN_START_ROW: dict[Color, int] = {
    Color.WHITE: 6,
    Color.BLACK: 1,
}


# --- MOVEMENT RULES ---
def is_legal_pawn_move(piece: Piece, target: Square, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally (and only when there is an opponent's piece to take)
    """
    dx = target.x - piece.position.x
    dy = target.y - piece.position.y
    forward = pawn_direction(piece.color)

    # pawn push
    if dx == 0 and dy == forward:
        return board.is_empty(target)

    # double pawn push from the starting row
    if dx == 0 and dy == 2 * forward:
        on_start_row = piece.position.y == PAWN_START_ROW[piece.color]
        passing_square = piece.position.offset(0, forward)
        return on_start_row and board.is_empty(passing_square) and board.is_empty(target)

    # pawns take diagonally
    if abs(dx) == 1 and dy == forward:
        target_piece = board.piece_at(target)
        return target_piece is not None and target_piece.color != piece.color

    return False


def is_legal_knight_move(piece: Piece, target: Square, board: Board) -> bool:
    """Knights jump: |delta_x| and |delta_y| are 1 and 2 (in either order). Anything in between does not matter."""
    dx = abs(target.x - piece.position.x)
    dy = abs(target.y - piece.position.y)
    return (dx, dy) in [(1, 2), (2, 1)]


def is_legal_bishop_move(piece: Piece, target: Square, board: Board) -> bool:
    """Bishops move diagonally: |delta_y| = |delta_x|, and nothing may stand in the way"""
    dx = abs(target.x - piece.position.x)
    dy = abs(target.y - piece.position.y)
    if dx != dy or dx == 0:
        return False
    return is_path_clear(piece.position, target, board)


def is_legal_rook_move(piece: Piece, target: Square, board: Board) -> bool:
    """Rooks move either horizontally or vertically, and nothing may stand in the way"""
    same_file = target.x == piece.position.x
    same_rank = target.y == piece.position.y
    if same_file == same_rank:
        # either on neither line, or not moving at all
        return False
    return is_path_clear(piece.position, target, board)


def is_legal_queen_move(piece: Piece, target: Square, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_legal_rook_move(piece, target, board) or is_legal_bishop_move(
        piece, target, board
    )


def is_legal_king_move(piece: Piece, target: Square, board: Board) -> bool:
    """
    The king can move by a single square at the time, in any direction.

    NOTE: Nothing stops the king from stepping onto an attacked square (there is no check detection).
    """
    dx = abs(target.x - piece.position.x)
    dy = abs(target.y - piece.position.y)
    return max(dx, dy) == 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
IsLegalMoveFn = Callable[[Piece, Square, Board], bool]
MOVEMENT_RULES: dict[PieceType, IsLegalMoveFn] = {
    PieceType.PAWN: is_legal_pawn_move,
    PieceType.KNIGHT: is_legal_knight_move,
    PieceType.BISHOP: is_legal_bishop_move,
    PieceType.ROOK: is_legal_rook_move,
    PieceType.QUEEN: is_legal_queen_move,
    PieceType.KING: is_legal_king_move,
}


def is_legal(piece: Piece, target: Square, board: Board) -> bool:
    """
    Checks shared by every piece type run first:
    * the target is on the board
    * the piece actually moves
    * you cannot land on your own piece

    After that, the rule of the piece type decides.
    """
    if not target.is_within_bounds() or target == piece.position:
        return False

    target_piece = board.piece_at(target)
    if target_piece is not None and target_piece.color == piece.color:
        return False

    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(piece, target, board)


def legal_targets(piece: Piece, board: Board) -> set[Square]:
    """Brute force: try every square on the board."""
    return {square for square in all_squares() if is_legal(piece, square, board)}
