"""Process-local implementation of the SessionStore. Used when no database is configured."""

import time
from copy import deepcopy
from typing import Callable

from src.core.models import SessionModel

Clock = Callable[[], float]


class InMemorySessionStore:
    """Sessions live in a dictionary for as long as the process does (or until they expire)."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._records: dict[str, tuple[SessionModel, float]] = {}
        self._clock = clock

    def load(self, key: str) -> SessionModel | None:
        record = self._records.get(key)
        if record is None:
            return None
        session, expires_at = record
        if expires_at <= self._clock():
            self._records.pop(key, None)
            return None
        # hand out a copy: callers must never be able to change what is stored
        return deepcopy(session)

    def save(self, key: str, session: SessionModel, expiry_seconds: int) -> None:
        now = self._clock()
        self._evict_expired(now)
        self._records[key] = (deepcopy(session), now + expiry_seconds)

    def clear(self) -> None:
        self._records.clear()

    def _evict_expired(self, now: float) -> None:
        """Abandoned sessions are never loaded again, so they get dropped here."""
        expired = [key for key, (_, expires_at) in list(self._records.items()) if expires_at <= now]
        for key in expired:
            self._records.pop(key, None)
