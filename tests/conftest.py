"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.memory_store import InMemorySessionStore
from src.db.schema import Base
from src.services.session_manager import SessionManager

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

START_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Sessions on a test database. Tables are removed at teardown to make unit tests of the store independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


class TickingClock:
    """Deterministic clock: every call is one second later than the previous one."""

    def __init__(self, start: datetime = START_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def memory_store() -> Generator[InMemorySessionStore, None, None]:
    """Ensures to clear the store between tests"""
    store = InMemorySessionStore()
    try:
        yield store
    finally:
        store.clear()


@pytest.fixture
def manager(memory_store: InMemorySessionStore, clock: TickingClock) -> SessionManager:
    return SessionManager(memory_store, clock=clock)


@pytest.fixture
def active_session(manager: SessionManager) -> Callable[[str], SessionManager]:
    """Create a session and seat p1 (white) and p2 (black)."""

    def _create(session_id: str = "g1") -> SessionManager:
        manager.create_session(session_id)
        manager.join_session(session_id, "p1", "Alice")
        manager.join_session(session_id, "p2", "Bob")
        return manager

    return _create
