"""Exhaustive minimax scorer.

X maximizes, O minimizes. Terminal wins score ±WIN_SCORE; every non-terminal
edge is shifted by the number of occupied cells in the child (subtracted at
maximizing nodes, added at minimizing ones), which prefers quicker wins and
slower losses. No pruning: the full remaining tree is visited.
"""

from __future__ import annotations

import math

from ttt_bot.engine.models import WIN_SCORE, Board, Cell, Outcome, opponent
from ttt_bot.engine.trace import DotTrace
from ttt_bot.games.tictactoe.board import (
    count_pieces,
    evaluate_winner,
    is_full,
    legal_moves,
    place,
)


def minimax(
    board: Board,
    is_maximizing: bool,
    figure: Cell,
    depth: int = 0,
    trace: DotTrace | None = None,
) -> int:
    """Score *board*, where *figure* is the mark placed last.

    The side to play here is ``opponent(figure)``; its children are scored with
    the flag inverted. Edges explored at ``depth == 0`` are recorded in *trace*.
    """
    winner = evaluate_winner(board)
    if winner != Outcome.NONE:
        return int(winner) * WIN_SCORE

    if is_full(board):
        return 0

    reverse_figure = opponent(figure)
    best_score = -math.inf if is_maximizing else math.inf

    for move in legal_moves(board):
        child = place(board, move, reverse_figure)
        num_of_pieces = count_pieces(child)
        if is_maximizing:
            score = minimax(child, False, reverse_figure, depth + 1, trace) - num_of_pieces
            if score > best_score:
                best_score = score
        else:
            score = minimax(child, True, reverse_figure, depth + 1, trace) + num_of_pieces
            if score < best_score:
                best_score = score

        if depth < 1 and trace is not None:
            trace.record(board, child, score)

    return int(best_score)
