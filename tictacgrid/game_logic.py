"""
tic-tac-toe rules on an N x N board

every snapshot is an immutable value; reset/apply_move build new ones
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

SUPPORTED_SIZES = (3, 4, 5)  # sizes offered by the ui
MIN_SIZE = 2                 # smallest board with rows/cols/diags

MAIN_DIAGONAL = 0
ANTI_DIAGONAL = 1


class GameError(Exception):
    """base for all game errors"""


class InvalidSizeError(GameError, ValueError):
    """board size is degenerate or does not match the board"""


class IllegalMoveError(GameError, ValueError):
    """move on an occupied/out-of-range cell or after game end"""


class Cell(Enum):
    """
    contents of one board cell
    """
    EMPTY = ''
    X = 'X'
    O = 'O'

    def opposite(self):
        """
        the other player's mark
        """
        if self is Cell.EMPTY:
            raise ValueError("empty cell has no opposite")
        return Cell.O if self is Cell.X else Cell.X


class Phase(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Evaluation:
    """
    which lines are complete and whether the game ended
    """
    winning_row: Optional[int] = None
    winning_col: Optional[int] = None
    winning_diagonal: Optional[int] = None  # 0 main, 1 anti
    is_over: bool = False
    is_draw: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """
    full game state at one point in time

    evaluation is always derived from board/size, never passed in
    """
    board: Tuple[Cell, ...]
    size: int
    turn: Cell = Cell.X
    evaluation: Evaluation = field(init=False)

    def __post_init__(self):
        board = tuple(self.board)
        if any(not isinstance(cell, Cell) for cell in board):
            raise ValueError("board cells must be Cell values")
        if self.turn not in (Cell.X, Cell.O):
            raise ValueError(f"turn must be X or O, got {self.turn!r}")
        # frozen, so bypass __setattr__; evaluate() checks size and length
        object.__setattr__(self, "board", board)
        object.__setattr__(self, "evaluation", evaluate(board, self.size))

    @property
    def finished(self):
        # won or drawn
        return self.evaluation.is_over or self.evaluation.is_draw


def _check_size(size):
    # bool is an int subclass, reject it explicitly
    if not isinstance(size, int) or isinstance(size, bool) or size < MIN_SIZE:
        raise InvalidSizeError(f"invalid board size: {size!r}")


def row_col(index, size):
    """
    row-major index -> (row, col)
    """
    return divmod(index, size)


def cell_index(row, col, size):
    """
    (row, col) -> row-major index
    """
    return row * size + col


def _is_filled(values):
    # same non-empty mark everywhere
    first = values[0]
    return first is not Cell.EMPTY and all(v is first for v in values)


def _rows(board, size):
    return [board[r * size:r * size + size] for r in range(size)]


def _cols(board, size):
    return [board[c::size] for c in range(size)]


def _diagonals(board, size):
    main = [board[i * size + i] for i in range(size)]
    anti = [board[i * size + size - 1 - i] for i in range(size)]
    return main, anti


def _first_filled(lines):
    for i, line in enumerate(lines):
        if _is_filled(line):
            return i
    return None


def evaluate(board, size):
    """
    scan rows, cols, diags for a complete line, then check for a draw
    """
    _check_size(size)
    board = tuple(board)
    if len(board) != size * size:
        raise InvalidSizeError(
            f"board has {len(board)} cells, expected {size * size}"
        )
    row = _first_filled(_rows(board, size))
    col = _first_filled(_cols(board, size))
    # main diagonal wins the tie when both are complete
    diagonal = _first_filled(_diagonals(board, size))
    is_over = row is not None or col is not None or diagonal is not None
    full = Cell.EMPTY not in board
    return Evaluation(
        winning_row=row,
        winning_col=col,
        winning_diagonal=diagonal,
        is_over=is_over,
        is_draw=full and not is_over,
    )


def reset(size):
    """
    fresh empty board, X to move
    """
    _check_size(size)
    logger.debug("new %dx%d game", size, size)
    return GameSnapshot(board=(Cell.EMPTY,) * (size * size), size=size)


def apply_move(snapshot, index):
    """
    place the current turn's mark at index and return the next snapshot
    """
    if snapshot.finished:
        raise IllegalMoveError("game is already over")
    n_cells = snapshot.size * snapshot.size
    if isinstance(index, bool) or not isinstance(index, int) \
       or not 0 <= index < n_cells:
        raise IllegalMoveError(f"cell {index!r} is outside the board")
    if snapshot.board[index] is not Cell.EMPTY:
        raise IllegalMoveError(f"cell {index} is already taken")

    board = list(snapshot.board)
    board[index] = snapshot.turn
    logger.debug("%s -> cell %d", snapshot.turn.value, index)
    return GameSnapshot(
        board=tuple(board),
        size=snapshot.size,
        turn=snapshot.turn.opposite(),
    )


def from_parts(board, size, turn):
    """
    rebuild a snapshot from board/size/turn, deriving the evaluation
    """
    return GameSnapshot(board=tuple(board), size=size, turn=turn)


def phase(snapshot):
    if snapshot.evaluation.is_over:
        return Phase.WON
    if snapshot.evaluation.is_draw:
        return Phase.DRAW
    return Phase.IN_PROGRESS


def winner(snapshot):
    """
    mark of the player who just moved, if that move ended the game
    """
    if not snapshot.evaluation.is_over:
        return None
    return snapshot.turn.opposite()


def winning_cells(snapshot):
    """
    indices of every cell lying on a completed line
    """
    ev, n = snapshot.evaluation, snapshot.size
    cells = set()
    if ev.winning_row is not None:
        cells.update(cell_index(ev.winning_row, c, n) for c in range(n))
    if ev.winning_col is not None:
        cells.update(cell_index(r, ev.winning_col, n) for r in range(n))
    if ev.winning_diagonal == MAIN_DIAGONAL:
        cells.update(cell_index(i, i, n) for i in range(n))
    elif ev.winning_diagonal == ANTI_DIAGONAL:
        cells.update(cell_index(i, n - 1 - i, n) for i in range(n))
    return frozenset(cells)


def empty_cells(snapshot):
    """
    indices still open for a move (none once the game ended)
    """
    if snapshot.finished:
        return []
    return [i for i, v in enumerate(snapshot.board) if v is Cell.EMPTY]
