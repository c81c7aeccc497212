"""Unit tests for /src/chess/board.py"""

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import Color, PieceType

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


def test_empty_board() -> None:
    board = Board.empty()
    assert len(board.grid) == 8
    assert all(len(row) == 8 for row in board.grid)
    assert all(piece is None for row in board.grid for piece in row)
    assert board.to_fen() == EMPTY_FEN


def test_from_fen_places_pieces() -> None:
    """First FEN group is row 0 (black's back rank)."""
    board = Board.from_fen(STARTING_POSITION_FEN)
    assert board.piece(Square(0, 0)) == Piece(PieceType.ROOK, Color.BLACK)
    assert board.piece(Square(0, 4)) == Piece(PieceType.KING, Color.BLACK)
    assert board.piece(Square(6, 3)) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.piece(Square(7, 3)) == Piece(PieceType.QUEEN, Color.WHITE)
    assert board.is_empty(Square(4, 4))


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION_FEN,
        EMPTY_FEN,
        "8/8/8/3P4/8/8/8/8",
        "r3k2r/8/8/8/8/8/8/R3K2R",
    ],
)
def test_to_fen(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen


def test_rows_are_json_friendly() -> None:
    """Empty squares become None, pieces become {type, color}"""
    board = Board.from_fen("8/8/8/3P4/8/8/8/8")
    rows = board.to_rows()
    assert rows[3][3] == {"type": "pawn", "color": "white"}
    assert rows[3][4] is None
    assert Board.from_rows(rows) == board


def test_with_move_returns_new_board() -> None:
    """The original board stays untouched."""
    board = Board.from_fen(STARTING_POSITION_FEN)
    e2, e4 = Square.from_algebraic("e2"), Square.from_algebraic("e4")
    moved = board.with_move(e2, e4)

    assert moved is not board
    assert moved.is_empty(e2)
    assert moved.piece(e4) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.piece(e2) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.is_empty(e4)


def test_with_move_replaces_captured_piece() -> None:
    board = Board.from_fen("8/8/8/3p4/4P3/8/8/8")
    moved = board.with_move(Square.from_algebraic("e4"), Square.from_algebraic("d5"))
    assert moved.to_fen() == "8/8/8/3P4/8/8/8/8"
