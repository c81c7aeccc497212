"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBSession(Base):
    """One row per game session. The whole session record is stored as a JSON document, replaced on every save."""

    __tablename__ = "game_sessions"
    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)
    # unix timestamp (seconds). Avoids the naive/aware datetime mess of SQLite.
    expires_at: Mapped[float]
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
