"""The board: an 8x8 grid of pieces (or None for an empty square).

A Board is never changed in place. Moving a piece produces a new Board, so anybody still holding the previous one
(another request reading the same snapshot for instance) keeps seeing a consistent position.
"""

from dataclasses import dataclass
from typing import Any, Optional, Self

from src.chess.pieces import Piece
from src.chess.square import BOARD_DIMENSIONS, Square

Row = tuple[Optional[Piece], ...]
Grid = tuple[Row, ...]

# JSON friendly version of the grid: null or {"type": ..., "color": ...} per square
RawRows = list[list[Optional[dict[str, str]]]]


@dataclass(frozen=True)
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls(
            tuple(
                tuple(None for _ in range(BOARD_DIMENSIONS[1]))
                for _ in range(BOARD_DIMENSIONS[0])
            )
        )

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group is row 0 (black's back rank), read from column 0 to column 7
        * digits denote that many consecutive empty squares
        * capital letters are white pieces, lower case letters black pieces
        """
        rows: list[Row] = []
        for fen_one_row in fen_str.split("/"):
            row: list[Optional[Piece]] = []
            for character in fen_one_row:
                if character.isalpha():
                    row.append(Piece.from_fen(character))
                else:
                    row.extend([None] * int(character))
            rows.append(tuple(row))
        return cls(tuple(rows))

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: Row) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_rows(cls, rows: RawRows) -> Self:
        return cls(
            tuple(
                tuple(Piece.from_dict(cell) if cell else None for cell in row)
                for row in rows
            )
        )

    def to_rows(self) -> RawRows:
        return [[piece.to_dict() if piece else None for piece in row] for row in self.grid]

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def with_move(self, from_square: Square, to_square: Square) -> Self:
        """New board where whatever stood on from_square now stands on to_square (and from_square is empty)."""
        piece_that_moved = self.piece(from_square)
        rows = [list(row) for row in self.grid]
        rows[to_square.row][to_square.col] = piece_that_moved
        rows[from_square.row][from_square.col] = None
        return type(self)(tuple(tuple(row) for row in rows))
