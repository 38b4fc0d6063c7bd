"""Tests for the HTTP routes in chess_match/api/routes.py (through the app factory in chess_match/api/app.py)"""

import json

import pytest
from fastapi.testclient import TestClient

from chess_match.api.app import build_repository, create_app
from chess_match.api.routes import game_error_handler
from chess_match.core.exceptions import GameError, GameNotFoundError, PieceNotFoundError
from chess_match.db.memory_repository import InMemoryMatchRepository
from chess_match.db.sql_repository import SQLMatchRepository
from chess_match.services.match_service import ChessMatchService

MATCH_ID = "lobby-1"
WHITE_PLAYER = "Mocker M. Mockerson"
BLACK_PLAYER = "Mock McMock"


@pytest.fixture
def client(service: ChessMatchService) -> TestClient:
    return TestClient(create_app(service))


def start(client: TestClient, minutes: int = 5, increment: int = 0) -> dict:
    response = client.post(
        f"/games/{MATCH_ID}/start",
        json={"time_control": {"minutes": minutes, "increment": increment}},
    )
    assert response.status_code == 200, response.text
    return response.json()


def move(client: TestClient, player: str, piece_id: str, target: str):
    return client.post(
        f"/games/{MATCH_ID}/move",
        json={"player_name": player, "move": {"piece_id": piece_id, "target_position": target}},
    )


def test_full_flow(client: TestClient) -> None:
    state = start(client)
    assert state["active_player"] == "white"
    assert state["time_remaining"] == {"white": 300, "black": 300}

    response = move(client, WHITE_PLAYER, "white-pawn-e2", "e4")
    assert response.status_code == 200
    assert response.json()["active_player"] == "black"

    response = client.get(f"/games/{MATCH_ID}")
    assert response.status_code == 200
    assert response.json()["last_move"] == {"piece_id": "white-pawn-e2", "target_position": "e4"}

    response = client.post(
        f"/games/{MATCH_ID}/time", json={"player_name": BLACK_PLAYER, "color": "black"}
    )
    assert response.status_code == 200
    assert response.json()["time_remaining"] == {"white": 300, "black": 299}

    response = client.post(f"/games/{MATCH_ID}/end")
    assert response.status_code == 200
    assert response.json() == {"match_id": MATCH_ID, "deleted": True}

    response = client.get(f"/games/{MATCH_ID}")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "GameNotFound"


def test_game_not_found(client: TestClient) -> None:
    response = client.get("/games/unknown")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "GameNotFound"


@pytest.mark.parametrize(
    "player, piece_id, target, code",
    [
        (WHITE_PLAYER, "white-pawn-a2", "a5", "InvalidMove"),
        (BLACK_PLAYER, "black-pawn-e7", "e5", "NotYourTurn"),
        ("stranger", "white-pawn-e2", "e4", "PlayerNotFound"),
        (WHITE_PLAYER, "black-pawn-e7", "e5", "CannotMoveOpponentPiece"),
        (WHITE_PLAYER, "white-unicorn", "e5", "PieceNotFound"),
        (WHITE_PLAYER, "a²", "a3", "PieceNotFound"),
    ],
)
def test_rejected_moves(client: TestClient, player: str, piece_id: str, target: str, code: str) -> None:
    before = start(client)
    response = move(client, player, piece_id, target)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == code
    assert client.get(f"/games/{MATCH_ID}").json() == before


def test_invalid_time_control(client: TestClient) -> None:
    response = client.post(
        f"/games/{MATCH_ID}/start", json={"time_control": {"minutes": 90, "increment": 0}}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "InvalidTimeControl"


def test_legal_moves(client: TestClient) -> None:
    start(client)
    response = client.get(
        f"/games/{MATCH_ID}/legal-moves",
        params={"player_name": WHITE_PLAYER, "piece_id": "white-pawn-d2"},
    )
    assert response.status_code == 200
    assert response.json()["legal_moves"] == ["d3", "d4"]


def test_legal_moves_unknown_piece(client: TestClient) -> None:
    start(client)
    response = client.get(
        f"/games/{MATCH_ID}/legal-moves",
        params={"player_name": WHITE_PLAYER, "piece_id": "e²"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PieceNotFound"


def test_end_is_idempotent(client: TestClient) -> None:
    response = client.post(f"/games/{MATCH_ID}/end")
    assert response.status_code == 200
    assert response.json()["deleted"] is False


def test_build_repository() -> None:
    assert isinstance(build_repository(None), InMemoryMatchRepository)
    assert isinstance(build_repository("sqlite:///:memory:"), SQLMatchRepository)


def test_default_app() -> None:
    """Without a service passed in, the app wires the default layers itself"""
    client = TestClient(create_app())
    assert client.get("/games/anything").status_code == 404



@pytest.mark.parametrize(
    "error, status_code",
    [
        (GameNotFoundError("Game not found or not started.", match_id=MATCH_ID), 404),
        (PieceNotFoundError("Piece not found.", piece_id="e²"), 400),
    ],
)
def test_game_error_handler(error: GameError, status_code: int) -> None:
    response = game_error_handler(None, error)
    assert response.status_code == status_code
    assert json.loads(response.body) == {"error": error.to_dict()}
