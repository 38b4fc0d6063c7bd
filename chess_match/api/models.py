"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from chess_match.chess.game import GameState
from chess_match.chess.pieces import Piece
from chess_match.chess.square import FILES
from chess_match.core.exceptions import InvalidRequestError
from chess_match.core.shared_types import Color, PieceType

PieceColor = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    return value[0] in FILES and value[1] in "12345678"


# --- REQUEST MODELS ---
class MovePayload(BaseModel):
    piece_id: str
    target_position: str

    @field_validator("target_position")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret target_position: {value!r} as a valid square name."
            )
        return value


class MoveRequest(BaseModel):
    player_name: str
    move: MovePayload


class TickRequest(BaseModel):
    player_name: str
    color: Color


class TimeControlPayload(BaseModel):
    """Range checks are done by the clock itself (InvalidTimeControlError)"""

    minutes: int
    increment: int = 0


class StartMatchRequest(BaseModel):
    time_control: TimeControlPayload


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    id: str
    type: PieceType
    color: Color
    position: str

    @classmethod
    def from_piece(cls, piece: Piece) -> "PieceResponse":
        return cls(
            id=piece.id,
            type=piece.type,
            color=piece.color,
            position=piece.position.to_algebraic(),
        )


class GameStateResponse(BaseModel):
    match_id: str
    pieces: list[PieceResponse]
    board_fen: str
    active_player: Color
    captured_pieces: dict[PieceColor, list[PieceResponse]]
    status: Optional[str]
    last_move: Optional[MovePayload]
    time_control: Optional[TimeControlPayload]
    time_remaining: Optional[dict[PieceColor, int]]

    @classmethod
    def from_state(cls, match_id: str, state: GameState) -> "GameStateResponse":
        last_move = (
            MovePayload(
                piece_id=state.last_move.piece_id,
                target_position=state.last_move.target.to_algebraic(),
            )
            if state.last_move
            else None
        )
        time_control = (
            TimeControlPayload(
                minutes=state.time_control.minutes,
                increment=state.time_control.increment,
            )
            if state.time_control
            else None
        )
        time_remaining = (
            {
                str(color): state.time_remaining.of(color)
                for color in Color
            }
            if state.time_remaining
            else None
        )
        return cls(
            match_id=match_id,
            pieces=[PieceResponse.from_piece(piece) for piece in state.board.pieces.values()],
            board_fen=state.board.to_fen(),
            active_player=state.active_player,
            captured_pieces={
                str(color): [
                    PieceResponse.from_piece(piece)
                    for piece in state.captured_pieces.by(color)
                ]
                for color in Color
            },
            status=str(state.status) if state.status else None,
            last_move=last_move,
            time_control=time_control,
            time_remaining=time_remaining,
        )


class LegalMovesResponse(BaseModel):
    match_id: str
    player_name: str
    piece_id: str
    legal_moves: list[str]


class EndMatchResponse(BaseModel):
    match_id: str
    deleted: bool
