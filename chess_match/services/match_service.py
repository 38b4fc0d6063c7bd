"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging

from chess_match.api.models import (
    EndMatchResponse,
    GameStateResponse,
    LegalMovesResponse,
    MoveRequest,
    StartMatchRequest,
    TickRequest,
)
from chess_match.chess.clock import TimeControl
from chess_match.chess.game import GameState
from chess_match.chess.moves import Move
from chess_match.core.exceptions import (
    GameError,
    GameNotFoundError,
    InvalidPlayerOrColorError,
    PlayerNotFoundError,
)
from chess_match.core.shared_types import Color
from chess_match.services.lobby import LobbyDirectory
from chess_match.services.session_store import MatchSessionStore

logger = logging.getLogger(__name__)


class ChessMatchService:
    """Orchestration of layers for online chess matches."""

    def __init__(self, store: MatchSessionStore, lobbies: LobbyDirectory) -> None:
        self.store = store
        self.lobbies = lobbies

    # -- API routes logic ---
    def start_match(self, match_id: str, request: StartMatchRequest) -> GameStateResponse:
        """
        Both players are seated: set up the pieces and the clock.
        ----
        Starting again replaces whatever state the match had.
        """
        time_control = TimeControl(
            minutes=request.time_control.minutes,
            increment=request.time_control.increment,
        )

        players = self.lobbies.players(match_id)
        missing = [color for color in Color if color not in players]
        if missing:
            raise PlayerNotFoundError(
                "Cannot start match without a player for both colors.",
                match_id=match_id,
                missing=",".join(missing),
            )

        with self.store.locked(match_id):
            state = self.store.put(match_id, GameState.new_game(time_control))
            self.lobbies.mark_started(match_id)
        logger.info(
            "Match %s started (%s+%s): %s vs %s",
            match_id,
            time_control.minutes,
            time_control.increment,
            players[Color.WHITE],
            players[Color.BLACK],
        )
        return GameStateResponse.from_state(match_id, state)

    def get_state(self, match_id: str) -> GameStateResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        with self.store.locked(match_id):
            self._assert_started(match_id)
            state = self.store.get(match_id)
        return GameStateResponse.from_state(match_id, state)

    def make_move(self, match_id: str, request: MoveRequest) -> GameStateResponse:
        """Make a move attempt."""
        players = self.lobbies.players(match_id)
        move = Move.from_request(request.move.piece_id, request.move.target_position)

        with self.store.locked(match_id):
            self._assert_started(match_id)
            state = self.store.get(match_id)
            try:
                new_state = state.apply_move(request.player_name, move, players)
            except GameError as exc:
                logger.info("Rejected move in match %s by %s: %s", match_id, request.player_name, exc)
                raise
            self.store.put(match_id, new_state)

        logger.debug(
            "Match %s: %s moved %s to %s",
            match_id,
            request.player_name,
            move.piece_id,
            move.target,
        )
        if new_state.is_over:
            logger.info("Match %s is over: %s", match_id, new_state.status)
        return GameStateResponse.from_state(match_id, new_state)

    def tick(self, match_id: str, request: TickRequest) -> GameStateResponse:
        """One second passed on the clock of `request.color`. You can only run your own clock."""
        players = self.lobbies.players(match_id)
        with self.store.locked(match_id):
            self._assert_started(match_id)
            if players.get(request.color) != request.player_name:
                if request.player_name not in players.values():
                    raise PlayerNotFoundError(
                        "Player not found in this match.", player=request.player_name
                    )
                raise InvalidPlayerOrColorError(
                    "Invalid player or color.", player=request.player_name, color=request.color
                )
            state = self.store.get(match_id)
            new_state = state.tick(request.color)
            self.store.put(match_id, new_state)

        if new_state.is_over and not state.is_over:
            logger.info("Match %s is over: %s", match_id, new_state.status)
        return GameStateResponse.from_state(match_id, new_state)

    def legal_moves(self, match_id: str, player_name: str, piece_id: str) -> LegalMovesResponse:
        """retrieve the squares a piece could move to."""
        players = self.lobbies.players(match_id)
        with self.store.locked(match_id):
            self._assert_started(match_id)
            state = self.store.get(match_id)
        return LegalMovesResponse(
            match_id=match_id,
            player_name=player_name,
            piece_id=piece_id,
            legal_moves=state.legal_moves(player_name, piece_id, players),
        )

    def end_match(self, match_id: str) -> EndMatchResponse:
        """Handle a request to end a match. Ending a match that has no state is not an error."""
        with self.store.locked(match_id):
            existed = self.store.exists(match_id)
            self.store.delete(match_id)
            self.lobbies.mark_ended(match_id)
        return EndMatchResponse(match_id=match_id, deleted=existed)

    # -- Internal helpers --
    def _assert_started(self, match_id: str) -> None:
        """Attempt to find a started match and raise error if it fails. Call it while holding the match lock."""
        if not self.lobbies.is_started(match_id):
            raise GameNotFoundError("Game not found or not started.", match_id=match_id)
