"""Generate database session / pick the storage backend"""

from sqlalchemy import Engine, StaticPool, create_engine, make_url
from sqlalchemy.orm import sessionmaker

from src.core.config import AppConfig
from src.db.memory_store import InMemorySessionStore
from src.db.repository import SessionStore
from src.db.schema import Base
from src.db.sql_store import SQLSessionStore


def is_in_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine_from_config(config: AppConfig) -> Engine:
    engine_kwargs: dict = {"echo": config.echo_sql, "pool_pre_ping": True}
    if config.database_url.startswith("sqlite"):
        # connections get handed to FastAPI's worker threads
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    if is_in_memory_sqlite(config.database_url):
        # an in-memory database only exists on its one connection (tests / local runs)
        engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(config.database_url, **engine_kwargs)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def build_session_store(config: AppConfig) -> SessionStore:
    """
    Called once at start-up. The result gets injected into the SessionManager.

    No database configured -> sessions live in process memory (lost on restart, not shared between workers).
    """
    if not config.database_url:
        return InMemorySessionStore()

    engine = create_engine_from_config(config)
    return SQLSessionStore(sessionmaker(bind=engine, autoflush=False))
