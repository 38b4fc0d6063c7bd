"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBMatch(Base):
    __tablename__ = "matches"
    id: Mapped[str] = mapped_column(primary_key=True)
    pieces: Mapped[list[dict[str, str]]] = mapped_column(JSON, default=list)
    active_player: Mapped[str]
    captured_pieces: Mapped[dict[str, list[dict[str, str]]]] = mapped_column(JSON)
    status: Mapped[Optional[str]]
    last_move: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    time_control: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    time_remaining: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
