"""
GameState is the entrypoint into the domain layer for the service layer.
It is responsible for all the business logic required to play a half-move (or run the clock) -->
every accepted request produces a brand-new GameState, which the service layer stores in place of the old one.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Self

from chess_match.chess.board import Board
from chess_match.chess.clock import TimeControl, TimeRemaining
from chess_match.chess.moves import Move, is_legal, legal_targets
from chess_match.chess.pieces import Piece
from chess_match.chess.square import Square
from chess_match.core.exceptions import (
    CannotMoveOpponentPieceError,
    GameOverError,
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    NotYourTurnError,
    PieceNotFoundError,
    PlayerNotFoundError,
    TimeControlNotInitializedError,
)
from chess_match.core.models import GameModel, PieceData
from chess_match.core.shared_types import TIMEOUT_STATUS, Color, PieceType, Status

# Slot binding as handed over by the Lobby Directory
Players = dict[Color, str]


@dataclass(frozen=True)
class CapturedPieces:
    """Pieces taken off the board, grouped by the side that captured them."""

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def by(self, color: Color) -> tuple[Piece, ...]:
        return self.white if color == Color.WHITE else self.black

    def add(self, color: Color, piece: Piece) -> Self:
        return replace(self, **{str(color): self.by(color) + (piece,)})


@dataclass(frozen=True)
class GameState:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    active_player: Color = Color.WHITE
    captured_pieces: CapturedPieces = field(default_factory=CapturedPieces)
    status: Optional[Status] = None
    last_move: Optional[Move] = None
    time_control: Optional[TimeControl] = None
    time_remaining: Optional[TimeRemaining] = None

    @classmethod
    def new_game(cls, time_control: Optional[TimeControl] = None) -> Self:
        """Standard opening layout, White to move. The clock only exists if a time control is given."""
        return cls(
            board=Board.starting_position(),
            time_control=time_control,
            time_remaining=(
                TimeRemaining.from_time_control(time_control) if time_control else None
            ),
        )

    # --- CONVERSION FROM/TO THE BOUNDARY MODEL ---
    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""
        try:
            board = Board.from_pieces(_piece_from_data(data) for data in model.pieces)
            captured = CapturedPieces(
                white=tuple(_piece_from_data(data) for data in model.captured_pieces.get("white", [])),
                black=tuple(_piece_from_data(data) for data in model.captured_pieces.get("black", [])),
            )
            active_player = Color(model.active_player)
            status = Status(model.status) if model.status else None
            time_control = TimeControl(**model.time_control) if model.time_control else None
            last_move = Move.from_dict(model.last_move) if model.last_move else None
            time_remaining = TimeRemaining(**model.time_remaining) if model.time_remaining else None
        except (KeyError, TypeError, ValueError, InvalidRequestError) as exc:
            raise GameStateError(f"Cannot restore game state from model: {exc}") from exc

        return cls(
            board=board,
            active_player=active_player,
            captured_pieces=captured,
            status=status,
            last_move=last_move,
            time_control=time_control,
            time_remaining=time_remaining,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            pieces=[_piece_to_data(piece) for piece in self.board.pieces.values()],
            active_player=str(self.active_player),
            captured_pieces={
                str(color): [_piece_to_data(piece) for piece in self.captured_pieces.by(color)]
                for color in Color
            },
            status=str(self.status) if self.status else None,
            last_move=self.last_move.to_dict() if self.last_move else None,
            time_control=(
                {"minutes": self.time_control.minutes, "increment": self.time_control.increment}
                if self.time_control
                else None
            ),
            time_remaining=(
                {"white": self.time_remaining.white, "black": self.time_remaining.black}
                if self.time_remaining
                else None
            ),
        )

    @property
    def is_over(self) -> bool:
        return self.status is not None

    @property
    def winner(self) -> Optional[Color]:
        """Only a timeout ends the game for now"""
        if self.status == Status.WHITE_WINS_ON_TIME:
            return Color.WHITE
        if self.status == Status.BLACK_WINS_ON_TIME:
            return Color.BLACK
        return None

    # --- MOVES ---
    def legal_moves(self, player: str, piece_id: str, players: Players) -> list[str]:
        """
        Target squares (algebraic notation) the piece could move to.
        ----

        Can be used to highlight squares in the UI. It does not matter whose turn it is,
        but you can only ask about your own pieces.
        """
        player_color = self._get_player_color(player, players)
        piece = self._locate_piece(piece_id)
        if piece.color != player_color:
            raise CannotMoveOpponentPieceError(
                "Cannot query moves of your opponent's pieces.", piece_id=piece_id
            )
        return sorted(square.to_algebraic() for square in legal_targets(piece, self.board))

    def apply_move(self, player: str, move: Move, players: Players) -> Self:
        """
        Attempt to make a move
        -----

        1. find out which color the player is playing with
        2. the game must still be running, and it must be your turn
        3. find the piece (by id, or by the square it is standing on for older clients)
        4. it must be your own piece, and the move must pass the movement rules
        5. take the opponent's piece off the board (if any) and keep it with your captured pieces
        6. move the piece, add the clock increment, hand the turn to the opponent

        Nothing is changed when any of the checks fail: the state is simply not replaced.
        """
        player_color = self._get_player_color(player, players)

        # make sure the game is (still) in progress
        if self.is_over:
            raise GameOverError(f"Game is over. status: {self.status}")

        # make sure it is your turn
        if player_color != self.active_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.active_player} to make a move first."
            )

        piece = self._locate_piece(move.piece_id)
        if piece.color != player_color:
            raise CannotMoveOpponentPieceError(
                "Cannot move opponent's pieces.", piece_id=piece.id
            )

        # Same check happens in the movement rules, but this one gets the clearer message.
        target_piece = self.board.piece_at(move.target)
        if target_piece is not None and target_piece.color == player_color:
            raise IllegalMoveError(
                "Cannot capture your own piece.", target=move.target.to_algebraic()
            )

        # Always re-validate on the server: client side checks are not to be trusted.
        if not is_legal(piece, move.target, self.board):
            raise IllegalMoveError(
                f"Move not allowed: {piece.type} from {piece.position} to {move.target}",
                piece_id=piece.id,
            )

        board, captured = self.board.move_piece(piece.id, move.target)
        captured_pieces = (
            self.captured_pieces.add(player_color, captured)
            if captured is not None
            else self.captured_pieces
        )

        return replace(
            self,
            board=board,
            captured_pieces=captured_pieces,
            active_player=player_color.opponent,
            last_move=Move(piece.id, move.target),
            time_remaining=self._time_after_move(player_color),
        )

    # --- CLOCK ---
    def tick(self, color: Color) -> Self:
        """
        One second has passed on the clock of `color`.
        ---

        Running out of time ends the game in favour of the opponent.
        Once the game is over, ticks no longer change anything.
        """
        if self.time_control is None or self.time_remaining is None:
            raise TimeControlNotInitializedError("Time control not initialized.")

        if self.is_over:
            return self

        time_remaining = self.time_remaining.decrement(color)
        status = TIMEOUT_STATUS[color] if time_remaining.of(color) <= 0 else None
        return replace(self, time_remaining=time_remaining, status=status)

    # -- PRIVATE HELPERS ---
    def _get_player_color(self, player: str, players: Players) -> Color:
        color = next((color for color, name in players.items() if name == player), None)
        if color is None:
            raise PlayerNotFoundError("Player not found in this match.", player=player)
        return color

    def _locate_piece(self, piece_id: str) -> Piece:
        """
        Pieces are identified by id.

        NOTE: Older clients send the square the piece stands on instead of its id. Fall back to that.
        """
        piece = self.board.find_piece(piece_id)
        if piece is not None:
            return piece

        try:
            square = Square.from_algebraic(piece_id)
        except InvalidRequestError:
            square = None

        piece = self.board.piece_at(square) if square is not None else None
        if piece is None:
            raise PieceNotFoundError("Piece not found.", piece_id=piece_id)
        return piece

    def _time_after_move(self, color: Color) -> Optional[TimeRemaining]:
        """Increment is credited to the player who just completed a move"""
        if self.time_control is None or self.time_remaining is None:
            return self.time_remaining
        return self.time_remaining.add(color, self.time_control.increment)


def _piece_to_data(piece: Piece) -> PieceData:
    return {
        "id": piece.id,
        "type": str(piece.type),
        "color": str(piece.color),
        "position": piece.position.to_algebraic(),
    }


def _piece_from_data(data: PieceData) -> Piece:
    return Piece(
        id=data["id"],
        type=PieceType(data["type"]),
        color=Color(data["color"]),
        position=Square.from_algebraic(data["position"]),
    )
