"""
FastAPI application factory.

Run with e.g.
    uvicorn chess_match.api.app:create_app --factory
"""

import logging
from typing import Optional

from fastapi import FastAPI

from chess_match.api.routes import game_error_handler, router
from chess_match.core import config
from chess_match.core.exceptions import GameError
from chess_match.db.database import create_db_engine, session_factory
from chess_match.db.memory_repository import InMemoryMatchRepository
from chess_match.db.repository import MatchRepository
from chess_match.db.sql_repository import SQLMatchRepository
from chess_match.services.lobby import InMemoryLobbyDirectory, LobbyDirectory
from chess_match.services.match_service import ChessMatchService
from chess_match.services.session_store import MatchSessionStore

logger = logging.getLogger(__name__)


def build_repository(database_url: Optional[str] = config.DATABASE_URL) -> MatchRepository:
    """SQL backed when a database URL is configured, in memory otherwise."""
    if database_url:
        logger.info("Storing match states in the database")
        return SQLMatchRepository(session_factory(create_db_engine(database_url)))
    logger.info("Storing match states in memory")
    return InMemoryMatchRepository()


def create_app(
    service: Optional[ChessMatchService] = None,
    lobbies: Optional[LobbyDirectory] = None,
) -> FastAPI:
    """Wire the layers together. Pass a service (or a lobby directory) in to replace the defaults."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if service is None:
        store = MatchSessionStore(build_repository())
        service = ChessMatchService(store, lobbies or InMemoryLobbyDirectory())

    app = FastAPI(title="Chess match service")
    app.state.match_service = service
    app.include_router(router)
    app.add_exception_handler(GameError, game_error_handler)
    return app
