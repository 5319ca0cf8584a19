from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple, Tuple

BOARD_SIZE = 3
WIN_SCORE = 100


# --- Cells & sides ---
class Cell(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> Cell:
        for cell, s in _SYMBOLS.items():
            if s == symbol:
                return cell
        raise ValueError(f"Unknown mark symbol: {symbol!r}")


_SYMBOLS = {Cell.EMPTY: "_", Cell.X: "X", Cell.O: "O"}


def opponent(side: Cell) -> Cell:
    """The other mark. ``side`` must be X or O."""
    return Cell.O if side == Cell.X else Cell.X


# --- Outcome ---
class Outcome(IntEnum):
    """Terminal classification; the value is the sign of the terminal score."""

    X_WINS = 1
    O_WINS = -1
    NONE = 0


# --- Board & move ---
Row = Tuple[Cell, Cell, Cell]
Board = Tuple[Row, Row, Row]


class Move(NamedTuple):
    row: int
    col: int


# --- Search result ---
@dataclass
class SearchResult:
    """Outcome of one selector invocation."""

    move: Move
    score: int | None = None
    candidates: list[tuple[Move, int]] = field(default_factory=list)
    fallback: bool = False
