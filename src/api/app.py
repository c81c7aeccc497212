"""Application factory: wires config, logging, storage and the SessionManager together."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse
from src.api.routes import router
from src.core.config import AppConfig, load_config
from src.core.exceptions import GameError
from src.core.logging import get_logger, setup_logging
from src.db.database import build_session_store
from src.db.repository import SessionStore
from src.services.session_manager import SessionManager


def create_app(
    config: Optional[AppConfig] = None, store: Optional[SessionStore] = None
) -> FastAPI:
    """The store is picked once here (or handed in by tests) and shared by every request."""
    cfg = config or load_config()
    setup_logging(cfg.log_level)
    logger = get_logger("chess_sessions.app")

    session_store = store if store is not None else build_session_store(cfg)

    app = FastAPI(title="Chess sessions")
    app.state.session_manager = SessionManager(
        session_store,
        key_prefix=cfg.key_prefix,
        ttl_seconds=cfg.session_ttl_seconds,
    )
    app.include_router(router)
    app.add_exception_handler(GameError, handle_game_error)  # type: ignore[arg-type]

    @app.get("/healthz")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(
        "app_initialized",
        store=type(session_store).__name__,
        key_prefix=cfg.key_prefix,
        session_ttl_seconds=cfg.session_ttl_seconds,
    )
    return app


async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
    """Domain errors become {"error": ..., "code": ...} with the status code the error type asks for."""
    get_logger("chess_sessions.app").warning(
        "request_rejected", path=request.url.path, code=exc.code, detail=str(exc)
    )
    body = ErrorResponse(error=str(exc), code=exc.code)
    return JSONResponse(status_code=exc.http_status, content=body.model_dump())
