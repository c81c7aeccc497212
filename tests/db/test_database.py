"""Unit tests for src/db/database.py"""

from pathlib import Path

from sqlalchemy import StaticPool

from src.chess.session import GameSession
from src.core.config import AppConfig
from src.db.database import build_session_store, create_engine_from_config, is_in_memory_sqlite
from src.db.memory_store import InMemorySessionStore
from src.db.sql_store import SQLSessionStore


def test_no_database_url_gives_memory_store() -> None:
    store = build_session_store(AppConfig(database_url=""))
    assert isinstance(store, InMemorySessionStore)


def test_database_url_gives_sql_store() -> None:
    store = build_session_store(AppConfig(database_url="sqlite:///:memory:"))
    assert isinstance(store, SQLSessionStore)

    # tables got created
    model = GameSession.new("g1").to_model()
    store.save("game:g1", model, 60)
    assert store.load("game:g1") == model


def test_in_memory_detection() -> None:
    assert is_in_memory_sqlite("sqlite://")
    assert is_in_memory_sqlite("sqlite:///:memory:")
    assert not is_in_memory_sqlite("sqlite:///sessions.db")
    assert not is_in_memory_sqlite("postgresql://user:pw@localhost/chess")


def test_file_database_gets_a_connection_pool(tmp_path: Path) -> None:
    """Only an in-memory database shares its single connection between threads."""
    file_engine = create_engine_from_config(AppConfig(database_url=f"sqlite:///{tmp_path / 'g.db'}"))
    memory_engine = create_engine_from_config(AppConfig(database_url="sqlite:///:memory:"))

    assert not isinstance(file_engine.pool, StaticPool)
    assert isinstance(memory_engine.pool, StaticPool)
