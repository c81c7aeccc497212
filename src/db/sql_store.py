"""Implementation of the SessionStore using SQLAlchemy"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StorageError
from src.core.models import SessionModel
from src.db.schema import DBSession

Clock = Callable[[], float]


class SQLSessionStore:
    """Data stored using SQL / methods implemented using SQLAlchemy

    Every load / save runs in its own short-lived database session, so calls coming from different
    worker threads never share a connection or a transaction.
    """

    def __init__(self, session_factory: Callable[[], Session], clock: Clock = time.time) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        """Provide a transactional session scope."""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def load(self, key: str) -> SessionModel | None:
        """Get session by key, if record exists. Expired records count as missing."""
        try:
            with self._session_scope() as db:
                record = db.scalar(select(DBSession).where(DBSession.key == key))
                if record is None or record.expires_at <= self._clock():
                    return None
                payload = record.payload
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not load session {key!r}.") from exc

        try:
            return SessionModel.from_dict(payload)
        except (KeyError, TypeError) as exc:
            raise StorageError(f"Stored session {key!r} is malformed.") from exc

    def save(self, key: str, session: SessionModel, expiry_seconds: int) -> None:
        """Insert or replace the full record."""
        record = DBSession(
            key=key,
            payload=session.to_dict(),
            expires_at=self._clock() + expiry_seconds,
        )
        try:
            with self._session_scope() as db:
                db.merge(record)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not save session {key!r}.") from exc
