"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chess_match.core.shared_types import Color
from chess_match.db.memory_repository import InMemoryMatchRepository
from chess_match.db.schema import Base
from chess_match.services.lobby import InMemoryLobbyDirectory
from chess_match.services.match_service import ChessMatchService
from chess_match.services.session_store import MatchSessionStore

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

MATCH_ID = "lobby-1"
WHITE_PLAYER = "Mocker M. Mockerson"
BLACK_PLAYER = "Mock McMock"


@pytest.fixture
def db_session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def lobbies() -> InMemoryLobbyDirectory:
    """A lobby with both seats taken, not started yet."""
    directory = InMemoryLobbyDirectory()
    directory.bind(MATCH_ID, Color.WHITE, WHITE_PLAYER)
    directory.bind(MATCH_ID, Color.BLACK, BLACK_PLAYER)
    return directory


@pytest.fixture
def store() -> Generator[MatchSessionStore, None, None]:
    """Ensures to clear the store between tests"""
    session_store = MatchSessionStore(InMemoryMatchRepository())
    try:
        yield session_store
    finally:
        session_store.clear()


@pytest.fixture
def service(store: MatchSessionStore, lobbies: InMemoryLobbyDirectory) -> ChessMatchService:
    return ChessMatchService(store, lobbies)
