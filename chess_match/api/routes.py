"""HTTP routes. Every handler is a thin wrapper around one ChessMatchService call."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from chess_match.api.models import (
    EndMatchResponse,
    GameStateResponse,
    LegalMovesResponse,
    MoveRequest,
    StartMatchRequest,
    TickRequest,
)
from chess_match.core.exceptions import GameError, GameNotFoundError
from chess_match.services.match_service import ChessMatchService

router = APIRouter(prefix="/games", tags=["games"])

# Anything not listed here is a plain validation failure: 400
ERROR_STATUS_CODES: dict[type[GameError], int] = {
    GameNotFoundError: 404,
}


def get_service(request: Request) -> ChessMatchService:
    """The service is created by the app factory and kept on the app state."""
    return request.app.state.match_service


def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        400,
    )
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


@router.get("/{match_id}", response_model=GameStateResponse)
def get_game_state(
    match_id: str, service: ChessMatchService = Depends(get_service)
) -> GameStateResponse:
    return service.get_state(match_id)


@router.post("/{match_id}/move", response_model=GameStateResponse)
def make_move(
    match_id: str,
    request: MoveRequest,
    service: ChessMatchService = Depends(get_service),
) -> GameStateResponse:
    return service.make_move(match_id, request)


@router.post("/{match_id}/time", response_model=GameStateResponse)
def tick_clock(
    match_id: str,
    request: TickRequest,
    service: ChessMatchService = Depends(get_service),
) -> GameStateResponse:
    return service.tick(match_id, request)


@router.post("/{match_id}/start", response_model=GameStateResponse)
def start_match(
    match_id: str,
    request: StartMatchRequest,
    service: ChessMatchService = Depends(get_service),
) -> GameStateResponse:
    return service.start_match(match_id, request)


@router.post("/{match_id}/end", response_model=EndMatchResponse)
def end_match(
    match_id: str, service: ChessMatchService = Depends(get_service)
) -> EndMatchResponse:
    return service.end_match(match_id)


@router.get("/{match_id}/legal-moves", response_model=LegalMovesResponse)
def legal_moves(
    match_id: str,
    player_name: str,
    piece_id: str,
    service: ChessMatchService = Depends(get_service),
) -> LegalMovesResponse:
    return service.legal_moves(match_id, player_name, piece_id)
