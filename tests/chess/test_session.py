"""Unit tests for /src/chess/session.py"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from src.chess.rules import initial_board
from src.chess.session import GameSession
from src.chess.square import Square
from src.core.exceptions import GameStateError
from src.core.shared_types import DRAW, Color, Status

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T1 = T0 + timedelta(minutes=1)


@pytest.fixture
def new_session() -> GameSession:
    return GameSession.new("g1", now=T0)


def test_new_session(new_session: GameSession) -> None:
    assert new_session.id == "g1"
    assert new_session.board == initial_board()
    assert new_session.turn == Color.WHITE
    assert new_session.status == Status.WAITING
    assert new_session.white_player is None
    assert new_session.black_player is None
    assert new_session.winner is None
    assert new_session.updated_at == T0


def test_sessions_are_immutable(new_session: GameSession) -> None:
    with pytest.raises(FrozenInstanceError):
        new_session.turn = Color.BLACK  # type: ignore[misc]


def test_seating_white_keeps_waiting(new_session: GameSession) -> None:
    seated = new_session.seat(Color.WHITE, "p1", "Alice", now=T1)
    assert seated.white_player == "p1"
    assert seated.white_name == "Alice"
    assert seated.status == Status.WAITING
    assert seated.updated_at == T1
    # the original is untouched
    assert new_session.white_player is None


def test_seating_both_activates(new_session: GameSession) -> None:
    seated = new_session.seat(Color.WHITE, "p1", "Alice").seat(Color.BLACK, "p2", "Bob")
    assert seated.status == Status.ACTIVE
    assert seated.black_player == "p2"
    assert seated.black_name == "Bob"


def test_color_of(new_session: GameSession) -> None:
    seated = new_session.seat(Color.WHITE, "p1", "Alice").seat(Color.BLACK, "p2", "Bob")
    assert seated.color_of("p1") == Color.WHITE
    assert seated.color_of("p2") == Color.BLACK
    assert seated.color_of("spectator") is None


def test_open_seat_order(new_session: GameSession) -> None:
    assert new_session.open_seat() == Color.WHITE
    one_seated = new_session.seat(Color.WHITE, "p1", "Alice")
    assert one_seated.open_seat() == Color.BLACK
    assert one_seated.seat(Color.BLACK, "p2", "Bob").open_seat() is None


def test_play_flips_turn_and_replaces_board(new_session: GameSession) -> None:
    e2, e4 = Square.from_algebraic("e2"), Square.from_algebraic("e4")
    after = new_session.play(e2, e4, now=T1)
    assert after.turn == Color.BLACK
    assert after.board.is_empty(e2)
    assert after.board.piece(e4) == new_session.board.piece(e2)
    assert after.updated_at == T1
    assert new_session.board == initial_board()


def test_model_conversion(new_session: GameSession) -> None:
    session = new_session.seat(Color.WHITE, "p1", "Alice").play(
        Square.from_algebraic("e2"), Square.from_algebraic("e4"), now=T1
    )
    model = session.to_model()

    assert model.id == "g1"
    assert model.turn == "black"
    assert model.players == {"white": "p1", "black": None}
    assert model.player_names == {"white": "Alice", "black": None}
    assert model.status == "waiting"
    assert model.winner is None
    assert model.last_move == T1.isoformat()
    assert model.board[4][4] == {"type": "pawn", "color": "white"}
    assert GameSession.from_model(model) == session


def test_winner_survives_conversion(new_session: GameSession) -> None:
    model = new_session.to_model()
    model.winner = DRAW
    assert GameSession.from_model(model).winner == DRAW
    model.winner = "black"
    assert GameSession.from_model(model).winner == Color.BLACK


def test_finished_status_is_accepted(new_session: GameSession) -> None:
    """Nothing produces it yet, but stored records with it must still load"""
    model = new_session.to_model()
    model.status = "finished"
    assert GameSession.from_model(model).status == Status.FINISHED


@pytest.mark.parametrize("status", ["in progress", "WAITING", ""])
def test_invalid_status_is_rejected(new_session: GameSession, status: str) -> None:
    model = new_session.to_model()
    model.status = status
    with pytest.raises(GameStateError):
        GameSession.from_model(model)


def test_invalid_turn_is_rejected(new_session: GameSession) -> None:
    model = new_session.to_model()
    model.turn = "w"
    with pytest.raises(GameStateError):
        GameSession.from_model(model)
