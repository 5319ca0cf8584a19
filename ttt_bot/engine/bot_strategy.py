"""Bot strategy abstraction: maps bot_id strings to move-selection callables."""

from __future__ import annotations

import logging
import math
import random as _random
import time
from typing import Callable, Protocol

from ttt_bot.engine.errors import NoLegalMovesError
from ttt_bot.engine.minimax import minimax
from ttt_bot.engine.models import Board, Cell, Move, SearchResult
from ttt_bot.engine.trace import DotTrace
from ttt_bot.games.tictactoe.board import legal_moves, place

logger = logging.getLogger(__name__)

OPENING_MOVE = Move(0, 0)


class BotStrategy(Protocol):
    """A bot strategy selects a move given the current board."""

    def choose_move(self, board: Board, side: Cell, turn_number: int) -> Move:
        """Return the chosen move; it must name an empty cell."""
        ...


class RandomStrategy:
    """Picks a uniformly random legal move."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = _random.Random(seed)

    def choose_move(self, board: Board, side: Cell, turn_number: int) -> Move:
        moves = legal_moves(board)
        if not moves:
            raise NoLegalMovesError("board has no empty cell")
        return self._rng.choice(moves)


class MinimaxStrategy:
    """Scores every legal move with exhaustive minimax and keeps the best.

    Ties go to the first candidate in row-major order. The very first move of a
    game is always the top-left corner. *rng* drives the random fallback used
    when no candidate beats the search sentinel.
    """

    def __init__(
        self, seed: int | None = None, rng: _random.Random | None = None
    ) -> None:
        self._rng = rng if rng is not None else _random.Random(seed)

    def choose_move(self, board: Board, side: Cell, turn_number: int) -> Move:
        return self.search(board, side, turn_number).move

    def search(
        self,
        board: Board,
        side: Cell,
        turn_number: int,
        trace: DotTrace | None = None,
    ) -> SearchResult:
        if turn_number == 0:
            result = SearchResult(move=OPENING_MOVE)
            if trace is not None:
                trace.mark_chosen(board, place(board, result.move, side), None)
            return result

        moves = legal_moves(board)
        if not moves:
            raise NoLegalMovesError("board has no empty cell")

        started = time.perf_counter()
        maximizing = side == Cell.X
        best_score = -math.inf if maximizing else math.inf
        best_move: Move | None = None
        candidates: list[tuple[Move, int]] = []

        for move in moves:
            child = place(board, move, side)
            score = minimax(child, side == Cell.O, side, trace=trace)
            candidates.append((move, score))
            if trace is not None:
                trace.record(board, child, score)

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
            elif score < best_score:
                best_score = score
                best_move = move

        if best_move is None:
            logger.warning("No best move found, choosing random move")
            result = SearchResult(
                move=self._rng.choice(moves), candidates=candidates, fallback=True
            )
        else:
            result = SearchResult(
                move=best_move, score=int(best_score), candidates=candidates
            )

        logger.info(
            "Minimax search: side=%s move=%s score=%s candidates=%d elapsed=%.0fms",
            side.symbol, tuple(result.move), result.score, len(candidates),
            (time.perf_counter() - started) * 1000,
        )
        if trace is not None:
            trace.mark_chosen(board, place(board, result.move, side), result.score)
        return result


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_STRATEGY_FACTORIES: dict[str, Callable[..., BotStrategy]] = {
    "random": lambda seed=None, **_kwargs: RandomStrategy(seed=seed),
    "minimax": lambda seed=None, **_kwargs: MinimaxStrategy(seed=seed),
}


def get_strategy(bot_id: str, **kwargs: object) -> BotStrategy:
    """Create a BotStrategy instance for the given *bot_id*."""
    factory = _STRATEGY_FACTORIES.get(bot_id)
    if factory is None:
        raise ValueError(f"Unknown bot_id: {bot_id!r}")
    return factory(**kwargs)


def register_strategy(
    bot_id: str, factory: Callable[..., BotStrategy]
) -> None:
    """Register a new strategy factory."""
    _STRATEGY_FACTORIES[bot_id] = factory


def list_strategies() -> list[str]:
    return sorted(_STRATEGY_FACTORIES)
