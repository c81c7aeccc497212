"""
Movement rules

Key idea: Use strategy pattern to define the movement rule for each piece type.

Every function in here is pure: boards go in, booleans / squares / new boards come out.
An illegal move is a normal outcome (False), never an exception.

NOTE: There is no notion of check in here. A move that leaves your own king attacked is still a valid move.
"""

from typing import Callable

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.shared_types import Color, PieceType

Vector = tuple[int, int]

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# White moves UP the board (towards row 0), black moves DOWN.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def other_color(color: Color) -> Color:
    return Color.BLACK if color == Color.WHITE else Color.WHITE


def initial_board() -> Board:
    """The standard starting position. Black occupies rows 0 and 1, white rows 6 and 7."""
    empty_rows = Board.empty().grid[2:6]
    return Board(
        (
            _back_rank(Color.BLACK),
            _pawn_row(Color.BLACK),
            *empty_rows,
            _pawn_row(Color.WHITE),
            _back_rank(Color.WHITE),
        )
    )


def _back_rank(color: Color) -> tuple[Piece, ...]:
    return tuple(Piece(piece_type, color) for piece_type in BACK_RANK)


def _pawn_row(color: Color) -> tuple[Piece, ...]:
    return tuple(Piece(PieceType.PAWN, color) for _ in BACK_RANK)


# --- PATH CHECK ---
def _step(delta: int) -> int:
    return (delta > 0) - (delta < 0)


def is_path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Walk from from_square towards to_square one square at a time and make sure nothing stands in between.
    ---

    Only the squares strictly in between count. Who stands on to_square is decided by the capture rule.
    Callers make sure the two squares share a rank, file or diagonal.
    """
    dr = _step(to_square.row - from_square.row)
    dc = _step(to_square.col - from_square.col)
    row = from_square.row + dr
    col = from_square.col + dc
    while (row, col) != (to_square.row, to_square.col):
        if not board.is_empty(Square(row, col)):
            return False
        row += dr
        col += dc
    return True


# --- MOVEMENT RULES ---
def is_valid_pawn_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their home row), if both squares are empty
    - takes diagonally (one square forward), and only when there is something to take

    NOTE: no en passant and no promotion.
    """
    color = board.piece(from_square).color
    direction = PAWN_DIRECTION[color]
    d_row = to_square.row - from_square.row
    d_col = to_square.col - from_square.col
    target_is_empty = board.is_empty(to_square)

    if d_col == 0 and target_is_empty:
        if d_row == direction:
            return True
        in_between = Square(from_square.row + direction, from_square.col)
        if (
            from_square.row == PAWN_HOME_ROW[color]
            and d_row == 2 * direction
            and board.is_empty(in_between)
        ):
            return True

    # the self capture rule already ruled out your own pieces, so an occupied square holds an opponent's piece
    return abs(d_col) == 1 and d_row == direction and not target_is_empty


def is_valid_rook_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """Rooks move either horizontally or vertically"""
    if from_square.row != to_square.row and from_square.col != to_square.col:
        return False
    return is_path_clear(board, from_square, to_square)


def is_valid_knight_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """Knights always move such that {|delta_row|, |delta_col|} = {1, 2}. They jump, so no path check."""
    deltas = {
        abs(to_square.row - from_square.row),
        abs(to_square.col - from_square.col),
    }
    return deltas == {1, 2}


def is_valid_bishop_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    if abs(to_square.row - from_square.row) != abs(to_square.col - from_square.col):
        return False
    return is_path_clear(board, from_square, to_square)


def is_valid_queen_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_valid_rook_move(board, from_square, to_square) or is_valid_bishop_move(
        board, from_square, to_square
    )


def is_valid_king_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """The king can move by a single square at the time. No castling."""
    return (
        abs(to_square.row - from_square.row) <= 1
        and abs(to_square.col - from_square.col) <= 1
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Board, Square, Square], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: is_valid_pawn_move,
    PieceType.KNIGHT: is_valid_knight_move,
    PieceType.BISHOP: is_valid_bishop_move,
    PieceType.ROOK: is_valid_rook_move,
    PieceType.QUEEN: is_valid_queen_move,
    PieceType.KING: is_valid_king_move,
}


# --- ENTRYPOINTS ---
def is_valid_move(board: Board, from_square: Square, to_square: Square, turn: Color) -> bool:
    """
    Can the player whose turn it is move the piece on from_square to to_square?
    ----

    1. from_square must hold one of your own pieces
    2. to_square must be on the board
    3. to_square must not hold one of your own pieces (no self capture)
    4. the piece's own movement rule must allow it
    """
    if not from_square.is_within_bounds():
        return False
    piece = board.piece(from_square)
    if piece is None or piece.color != turn:
        return False

    if not to_square.is_within_bounds():
        return False

    target = board.piece(to_square)
    if target is not None and target.color == piece.color:
        return False

    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(board, from_square, to_square)


def get_valid_moves(board: Board, from_square: Square, turn: Color) -> list[Square]:
    """All squares the piece on from_square may move to, in row-major order. Used to highlight moves."""
    all_squares = [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
    return [
        to_square
        for to_square in all_squares
        if is_valid_move(board, from_square, to_square, turn)
    ]


def make_move(board: Board, from_square: Square, to_square: Square) -> Board:
    """
    Apply the move, returning a new board.

    NOTE: legality is NOT checked here. Call is_valid_move first.
    """
    return board.with_move(from_square, to_square)
