"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)

Only plain JSON types live in here: the record gets stored as-is by any of the storage backends.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional, Self

# Type aliases to make SessionModel easier to read
PieceColor = str
PlayerId = str
DisplayName = str
RawSquare = Optional[dict[str, str]]


@dataclass
class SessionModel:
    """Transport-safe representation of a game session used between API, Service, DB, and domain layers."""

    id: str
    board: list[list[RawSquare]]
    turn: PieceColor
    players: dict[PieceColor, Optional[PlayerId]]
    player_names: dict[PieceColor, Optional[DisplayName]]
    status: str
    winner: Optional[str]
    last_move: str  # ISO-8601 timestamp of the last change

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            board=data["board"],
            turn=data["turn"],
            players=dict(data["players"]),
            player_names=dict(data["player_names"]),
            status=data["status"],
            winner=data.get("winner"),
            last_move=data["last_move"],
        )
