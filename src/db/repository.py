"""Protocol for the session store (key-value storage with expiry). Implemented in-memory and using SQLAlchemy."""

from typing import Protocol

from src.core.models import SessionModel


class SessionStore(Protocol):
    """Persistence layer orchestration"""

    def load(self, key: str) -> SessionModel | None:
        """Get the session stored under key, if the record exists (and has not expired)."""
        ...

    def save(self, key: str, session: SessionModel, expiry_seconds: int) -> None:
        """Store (insert or replace) the whole session record. Expiry is a hint for eviction."""
        ...
