"""Generate database sessions"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chess_match.core import config
from chess_match.db.schema import Base


def create_db_engine(database_url: str, echo: bool = config.SQL_ECHO) -> Engine:
    """Engine with all tables created."""
    engine = create_engine(database_url, echo=echo)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False)
