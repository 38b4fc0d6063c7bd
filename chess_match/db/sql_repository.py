"""Implementation of (Match)Repository using SQLAlchemy"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from chess_match.core.models import GameModel
from chess_match.db.schema import DBMatch

logger = logging.getLogger(__name__)


class SQLMatchRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy

    Every call opens its own short-lived session: requests for different matches are served from different threads.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get_match(self, match_id: str) -> GameModel | None:
        """Get the game state of a match, if record exists."""
        with self.session_factory() as db:
            match_db = self._fetch_match(db, match_id)
            if match_db:
                return self._to_model(match_db)
            return None

    def save_match(self, match_id: str, game: GameModel) -> GameModel:
        """Insert a new record, or overwrite every column of the existing one."""
        with self.session_factory() as db:
            match_db = self._fetch_match(db, match_id)
            if match_db is None:
                match_db = DBMatch(id=match_id)
                db.add(match_db)
                logger.debug("Creating record for match %s", match_id)

            match_db.pieces = game.pieces
            match_db.active_player = game.active_player
            match_db.captured_pieces = game.captured_pieces
            match_db.status = game.status
            match_db.last_move = game.last_move
            match_db.time_control = game.time_control
            match_db.time_remaining = game.time_remaining
            db.commit()
            db.refresh(match_db)
            return self._to_model(match_db)

    def delete_match(self, match_id: str) -> GameModel | None:
        """Remove a match's record."""
        with self.session_factory() as db:
            match_db = self._fetch_match(db, match_id)
            if not match_db:
                return None
            game_model = self._to_model(match_db)
            db.delete(match_db)
            db.commit()
            return game_model

    def clear(self) -> None:
        with self.session_factory() as db:
            db.execute(delete(DBMatch))
            db.commit()

    def _fetch_match(self, db: Session, match_id: str) -> DBMatch | None:
        query = select(DBMatch).where(DBMatch.id == match_id)
        return db.scalar(query)

    def _to_model(self, match_db: DBMatch) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            pieces=list(match_db.pieces),
            active_player=match_db.active_player,
            captured_pieces={
                color: list(pieces) for color, pieces in match_db.captured_pieces.items()
            },
            status=match_db.status,
            last_move=match_db.last_move,
            time_control=match_db.time_control,
            time_remaining=match_db.time_remaining,
        )
