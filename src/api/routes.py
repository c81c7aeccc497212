"""HTTP routes. Thin: parse the request, call the SessionManager, shape the response."""

import secrets
import string

from fastapi import APIRouter, Depends, Query, Request

from src.api.models import (
    CreateSessionResponse,
    JoinRequest,
    JoinResponse,
    MoveRequest,
    SessionResponse,
    SquareModel,
    ValidMovesResponse,
)
from src.chess.square import Square
from src.services.session_manager import SessionManager

SESSION_ID_ALPHABET = string.ascii_lowercase + string.digits
SESSION_ID_LENGTH = 8

router = APIRouter(prefix="/api/game", tags=["game"])


def new_session_id() -> str:
    """Short random token that is easy to share in a link."""
    return "".join(secrets.choice(SESSION_ID_ALPHABET) for _ in range(SESSION_ID_LENGTH))


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("/create", response_model=CreateSessionResponse)
def create_game(
    manager: SessionManager = Depends(get_session_manager),
) -> CreateSessionResponse:
    game_id = new_session_id()
    session = manager.create_session(game_id)
    return CreateSessionResponse(game_id=game_id, game=SessionResponse.from_session(session))


@router.get("/{game_id}", response_model=SessionResponse)
def get_game(
    game_id: str, manager: SessionManager = Depends(get_session_manager)
) -> SessionResponse:
    return SessionResponse.from_session(manager.get_session(game_id))


@router.post("/{game_id}/join", response_model=JoinResponse)
def join_game(
    game_id: str,
    body: JoinRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> JoinResponse:
    result = manager.join_session(game_id, body.player_id, body.username)
    return JoinResponse(
        game=SessionResponse.from_session(result.session),
        color=result.color,
        player_id=body.player_id,
    )


@router.post("/{game_id}/move", response_model=SessionResponse)
def make_move(
    game_id: str,
    body: MoveRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionResponse:
    session = manager.submit_move(
        game_id,
        body.player_id,
        body.from_square.to_square(),
        body.to_square.to_square(),
    )
    return SessionResponse.from_session(session)


@router.get("/{game_id}/valid-moves", response_model=ValidMovesResponse)
def valid_moves(
    game_id: str,
    player_id: str = Query(...),
    row: int = Query(...),
    col: int = Query(...),
    manager: SessionManager = Depends(get_session_manager),
) -> ValidMovesResponse:
    from_square = Square(row, col)
    moves = manager.valid_moves(game_id, player_id, from_square)
    return ValidMovesResponse(
        game_id=game_id,
        from_square=SquareModel.from_square(from_square),
        valid_moves=[SquareModel.from_square(square) for square in moves],
    )
