"""
A GameSession is one match between two remote players: the board, whose turn it is and who sits where.

The session is an immutable value. Every transition (seating a player, playing a move) returns a new session with a
refreshed timestamp, which the service then saves as a whole. Nothing in here talks to storage.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Self

from src.chess.board import Board
from src.chess.rules import initial_board, make_move, other_color
from src.chess.square import Square
from src.core.exceptions import GameStateError
from src.core.models import SessionModel
from src.core.shared_types import DRAW, Color, Status

# None while undecided, otherwise a Color or the string "draw"
Winner = Optional[Color | str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameSession:
    id: str
    board: Board
    turn: Color
    white_player: Optional[str]
    black_player: Optional[str]
    white_name: Optional[str]
    black_name: Optional[str]
    status: Status
    # NOTE: no rule in the engine decides a game yet, so this stays None for now.
    winner: Winner
    updated_at: datetime

    @classmethod
    def new(cls, session_id: str, now: Optional[datetime] = None) -> Self:
        """Fresh session: starting position, white to move, nobody seated yet."""
        return cls(
            id=session_id,
            board=initial_board(),
            turn=Color.WHITE,
            white_player=None,
            black_player=None,
            white_name=None,
            black_name=None,
            status=Status.WAITING,
            winner=None,
            updated_at=now or utc_now(),
        )

    # --- QUERIES ---
    def color_of(self, player_id: str) -> Optional[Color]:
        """Which side does this player play? None for anybody not seated (spectators)."""
        if self.white_player is not None and self.white_player == player_id:
            return Color.WHITE
        if self.black_player is not None and self.black_player == player_id:
            return Color.BLACK
        return None

    def open_seat(self) -> Optional[Color]:
        """White gets filled first, then black."""
        if self.white_player is None:
            return Color.WHITE
        if self.black_player is None:
            return Color.BLACK
        return None

    # --- TRANSITIONS ---
    def seat(
        self,
        color: Color,
        player_id: str,
        display_name: str,
        now: Optional[datetime] = None,
    ) -> Self:
        """Put the player in the given (empty) seat. Once both seats are taken, the game starts."""
        if color == Color.WHITE:
            seated = replace(self, white_player=player_id, white_name=display_name)
        else:
            seated = replace(self, black_player=player_id, black_name=display_name)

        both_seated = seated.white_player is not None and seated.black_player is not None
        status = Status.ACTIVE if both_seated else seated.status
        return replace(seated, status=status, updated_at=now or utc_now())

    def play(self, from_square: Square, to_square: Square, now: Optional[datetime] = None) -> Self:
        """
        Apply the move and hand the turn to the other color.

        NOTE: the move is assumed to be valid already (see rules.is_valid_move).
        """
        return replace(
            self,
            board=make_move(self.board, from_square, to_square),
            turn=other_color(self.turn),
            updated_at=now or utc_now(),
        )

    # --- CONVERSION TO/FROM BOUNDARY MODEL ---
    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a GameSession from the information the Service layer actually has"""

        # Validation
        if model.status not in Status.__members__.values():
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        if model.turn not in Color.__members__.values():
            raise GameStateError(f"Invalid color to move: {model.turn!r}")

        winner: Winner = None
        if model.winner == DRAW:
            winner = DRAW
        elif model.winner is not None:
            winner = Color(model.winner)

        return cls(
            id=model.id,
            board=Board.from_rows(model.board),
            turn=Color(model.turn),
            white_player=model.players.get(Color.WHITE.value),
            black_player=model.players.get(Color.BLACK.value),
            white_name=model.player_names.get(Color.WHITE.value),
            black_name=model.player_names.get(Color.BLACK.value),
            status=Status(model.status),
            winner=winner,
            updated_at=datetime.fromisoformat(model.last_move),
        )

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""
        return SessionModel(
            id=self.id,
            board=self.board.to_rows(),
            turn=self.turn.value,
            players={
                Color.WHITE.value: self.white_player,
                Color.BLACK.value: self.black_player,
            },
            player_names={
                Color.WHITE.value: self.white_name,
                Color.BLACK.value: self.black_name,
            },
            status=self.status.value,
            winner=str(self.winner) if self.winner is not None else None,
            last_move=self.updated_at.isoformat(),
        )
