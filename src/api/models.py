"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.chess.session import GameSession
from src.chess.square import Square
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color

PieceColor = str
PlayerId = str


class SquareModel(BaseModel):
    """(row, col) with row 0 being black's back rank. Range is NOT validated here: off-board targets are just invalid moves."""

    row: int
    col: int

    def to_square(self) -> Square:
        return Square(self.row, self.col)

    @classmethod
    def from_square(cls, square: Square) -> "SquareModel":
        return cls(row=square.row, col=square.col)


# --- REQUEST MODELS ---
class JoinRequest(BaseModel):
    player_id: PlayerId
    username: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Username required")
        return value.strip()

    @field_validator("player_id")
    @classmethod
    def validate_player_id(cls, value: str) -> str:
        if not value:
            raise InvalidRequestError("player_id required")
        return value


class MoveRequest(BaseModel):
    # "from" is a keyword, so the field gets an alias
    model_config = ConfigDict(populate_by_name=True)

    player_id: PlayerId
    from_square: SquareModel = Field(alias="from")
    to_square: SquareModel = Field(alias="to")


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    id: str
    board: list[list[Optional[dict[str, str]]]]
    turn: Color
    players: dict[PieceColor, Optional[PlayerId]]
    player_names: dict[PieceColor, Optional[str]]
    status: str
    winner: Optional[str]
    last_move: str

    @classmethod
    def from_session(cls, session: GameSession) -> "SessionResponse":
        model = session.to_model()
        return cls(
            id=model.id,
            board=model.board,
            turn=Color(model.turn),
            players=model.players,
            player_names=model.player_names,
            status=model.status,
            winner=model.winner,
            last_move=model.last_move,
        )


class CreateSessionResponse(BaseModel):
    game_id: str
    game: SessionResponse


class JoinResponse(BaseModel):
    game: SessionResponse
    color: Color
    player_id: PlayerId


class ValidMovesResponse(BaseModel):
    game_id: str
    from_square: SquareModel
    valid_moves: list[SquareModel]


class ErrorResponse(BaseModel):
    error: str
    code: str
