"""
Orchestration of communication from API router to business logic and persistence layers (and the reverse direction).

Every operation is a single read-modify-write against the store:
load the session -> ask the domain layer what the new session looks like -> save the whole record.

NOTE: there is no locking. Two moves submitted at the same time for the same session can both be accepted against
the same position, and the last save wins. Fine for a casual two player game with a low move rate.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from src.chess.rules import get_valid_moves, is_valid_move
from src.chess.session import GameSession, utc_now
from src.chess.square import Square
from src.core.config import DEFAULT_KEY_PREFIX, DEFAULT_SESSION_TTL_SECONDS
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    SessionNotFoundError,
    SlotFullError,
    StorageError,
)
from src.core.logging import get_logger
from src.core.shared_types import Color
from src.db.repository import SessionStore

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class JoinResult:
    session: GameSession
    color: Color


class SessionManager:
    """Session lifecycle + arbitration of move requests."""

    def __init__(
        self,
        store: SessionStore,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._log = get_logger("chess_sessions.session_manager")

    # -- API routes logic ---
    def create_session(self, session_id: str) -> GameSession:
        """New session, waiting for two players to join."""
        session = GameSession.new(session_id, now=self._clock())
        self._save(session)
        self._log.info("session_created", session_id=session_id)
        return session

    def get_session(self, session_id: str) -> GameSession:
        """
        Retrieve current session state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        return self._fetch_session(session_id)

    def join_session(self, session_id: str, player_id: str, display_name: str) -> JoinResult:
        """
        A player asks for a seat.
        ----

        1. Already seated? --> nothing changes, you get your color back
        2. White seat open? --> take it, still waiting for an opponent
        3. Black seat open? --> take it, the game starts
        4. Otherwise the session is full
        """
        session = self._fetch_session(session_id)
        log = self._log.bind(session_id=session_id, player_id=player_id)

        seated_color = session.color_of(player_id)
        if seated_color is not None:
            log.info("player_rejoined", color=seated_color.value)
            return JoinResult(session, seated_color)

        open_color = session.open_seat()
        if open_color is None:
            log.warning("join_rejected_full")
            raise SlotFullError(f"Session {session_id!r} already has two players.")

        seated = session.seat(open_color, player_id, display_name, now=self._clock())
        self._save(seated)
        log.info("player_joined", color=open_color.value, status=seated.status.value)
        return JoinResult(seated, open_color)

    def submit_move(
        self, session_id: str, player_id: str, from_square: Square, to_square: Square
    ) -> GameSession:
        """
        Make a move attempt.
        ----

        1. Is the player seated, and is it their color's turn?
        2. Does the piece move allow it?
        3. Apply the move, flip the turn, and store the new session
        """
        session = self._fetch_session(session_id)
        log = self._log.bind(
            session_id=session_id,
            player_id=player_id,
            from_square=from_square.to_algebraic(),
            to_square=to_square.to_algebraic(),
        )

        # spectators and players waiting for their turn get the same answer
        player_color = session.color_of(player_id)
        if player_color is None or player_color != session.turn:
            log.info("move_rejected", reason=NotYourTurnError.code)
            raise NotYourTurnError("Not your turn.")

        if not is_valid_move(session.board, from_square, to_square, session.turn):
            log.info("move_rejected", reason=IllegalMoveError.code)
            raise IllegalMoveError(
                f"Invalid move: {from_square.to_algebraic()} -> {to_square.to_algebraic()}"
            )

        after_move = session.play(from_square, to_square, now=self._clock())
        self._save(after_move)
        log.info("move_applied", next_turn=after_move.turn.value)
        return after_move

    def valid_moves(self, session_id: str, player_id: str, from_square: Square) -> list[Square]:
        """
        Squares the player's piece on from_square may move to (highlighting in the UI).

        Uses the player's own color, not the color to move: you can look at your options while waiting.
        Spectators get an empty list.
        """
        session = self._fetch_session(session_id)
        player_color = session.color_of(player_id)
        if player_color is None:
            return []
        return get_valid_moves(session.board, from_square, player_color)

    # -- Internal helpers --
    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    def _fetch_session(self, session_id: str) -> GameSession:
        """Attempt to find the session in the store and raise error if it fails."""
        model = self.store.load(self._key(session_id))
        if model is None:
            raise SessionNotFoundError(f"Session with {session_id=} not found.")
        try:
            return GameSession.from_model(model)
        except (GameStateError, ValueError, KeyError, TypeError, AttributeError) as exc:
            self._log.error("stored_session_malformed", session_id=session_id, detail=str(exc))
            raise StorageError(f"Stored session {session_id!r} is malformed.") from exc

    def _save(self, session: GameSession) -> None:
        self.store.save(self._key(session.id), session.to_model(), self.ttl_seconds)
