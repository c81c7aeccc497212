"""
Custom exceptions.

Every error the service can surface derives from GameError, so callers that do not care about the specific
reason can catch a single type. `code` and `http_status` are only read by the API layer.
"""


class GameError(Exception):
    """Top level exception for anything going wrong while handling a game session."""

    code: str = "game_error"
    http_status: int = 400


# --- PERSISTENCE ---
class RepositoryError(GameError):
    code = "repository_error"
    http_status = 500


class SessionNotFoundError(RepositoryError):
    """Session id does not resolve in storage."""

    code = "not_found"
    http_status = 404


class StorageError(RepositoryError):
    """The storage backend itself failed (not reachable, broken record, ...)."""

    code = "storage_failure"
    http_status = 503


# --- SESSION BOOKKEEPING ---
class GameStateError(GameError):
    code = "invalid_state"


class SlotFullError(GameStateError):
    """Both seats are taken by other players. Retrying with the same input will never succeed."""

    code = "full"


class NotYourTurnError(GameError):
    """Mover is not seated in this game, or it is the other color's turn."""

    code = "not_your_turn"


class IllegalMoveError(GameError):
    code = "invalid_move"


# --- API ---
class InvalidRequestError(GameError):
    code = "invalid_request"
