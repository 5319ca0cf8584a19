"""3x3 board model: construction, placement, terminal detection and legal moves.

Boards are immutable nested tuples. ``place`` returns a fresh board, so search
branches never share mutable state.
"""

from __future__ import annotations

from ttt_bot.engine.errors import InvalidBoardError
from ttt_bot.engine.models import BOARD_SIZE, Board, Cell, Move, Outcome

WIN_LINES = [
    ((0, 0), (0, 1), (0, 2)), ((1, 0), (1, 1), (1, 2)), ((2, 0), (2, 1), (2, 2)),  # rows
    ((0, 0), (1, 0), (2, 0)), ((0, 1), (1, 1), (2, 1)), ((0, 2), (1, 2), (2, 2)),  # cols
    ((0, 0), (1, 1), (2, 2)), ((0, 2), (1, 1), (2, 0)),                            # diagonals
]

_OUTCOME_FOR_MARK = {Cell.X: Outcome.X_WINS, Cell.O: Outcome.O_WINS}


def empty_board() -> Board:
    return tuple(tuple(Cell.EMPTY for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


def parse_board(rows: object) -> Board:
    """Build a board from nested sequences of 0/1/2 (or Cell) values."""
    if not isinstance(rows, (list, tuple)) or len(rows) != BOARD_SIZE:
        raise InvalidBoardError(f"board must have {BOARD_SIZE} rows", rows)
    parsed = []
    for i, row in enumerate(rows):
        if not isinstance(row, (list, tuple)) or len(row) != BOARD_SIZE:
            raise InvalidBoardError(f"row {i} must have {BOARD_SIZE} cells", rows)
        cells = []
        for j, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidBoardError(f"cell ({i}, {j}) is not an integer", rows)
            try:
                cells.append(Cell(value))
            except ValueError:
                raise InvalidBoardError(
                    f"cell ({i}, {j}) has invalid mark {value}", rows
                ) from None
        parsed.append(tuple(cells))
    return tuple(parsed)


def board_from_string(text: str) -> Board:
    """Inverse of :func:`board_to_string`; rows may be split by newlines or ``/``."""
    rows = [r for r in text.replace("/", "\n").split("\n") if r.strip()]
    try:
        return parse_board([[int(Cell.from_symbol(ch)) for ch in r.strip()] for r in rows])
    except ValueError as e:
        raise InvalidBoardError(str(e), text) from e


def place(board: Board, move: Move, mark: Cell) -> Board:
    """Return a copy of *board* with *mark* written at *move*."""
    row, col = move
    return tuple(
        tuple(mark if (i, j) == (row, col) else cell for j, cell in enumerate(r))
        for i, r in enumerate(board)
    )


def evaluate_winner(board: Board) -> Outcome:
    """Owner of the first completed line, or ``Outcome.NONE``.

    A full board without a line is also ``NONE``; use :func:`is_full` to tell
    a draw from an undecided position.
    """
    for (a, b, c) in WIN_LINES:
        mark = board[a[0]][a[1]]
        if mark != Cell.EMPTY and mark == board[b[0]][b[1]] == board[c[0]][c[1]]:
            return _OUTCOME_FOR_MARK[mark]
    return Outcome.NONE


def is_full(board: Board) -> bool:
    return all(cell != Cell.EMPTY for row in board for cell in row)


def is_terminal(board: Board) -> bool:
    return evaluate_winner(board) != Outcome.NONE or is_full(board)


def legal_moves(board: Board) -> list[Move]:
    """Empty cells in row-major order."""
    return [
        Move(i, j)
        for i, row in enumerate(board)
        for j, cell in enumerate(row)
        if cell == Cell.EMPTY
    ]


def count_pieces(board: Board) -> int:
    return sum(1 for row in board for cell in row if cell != Cell.EMPTY)


def board_to_string(board: Board) -> str:
    """Render as ``X``/``O``/``_`` rows, each terminated by a newline."""
    return "".join(
        "".join(Cell(cell).symbol for cell in row) + "\n" for row in board
    )
