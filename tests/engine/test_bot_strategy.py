"""Tests for the bot strategy abstraction and the minimax move selector."""

import math
import random

import pytest

from ttt_bot.engine import bot_strategy
from ttt_bot.engine.bot_strategy import (
    OPENING_MOVE,
    MinimaxStrategy,
    RandomStrategy,
    get_strategy,
    list_strategies,
    register_strategy,
)
from ttt_bot.engine.errors import NoLegalMovesError
from ttt_bot.engine.models import WIN_SCORE, Cell, Move
from ttt_bot.engine.trace import DotTrace
from ttt_bot.games.tictactoe.board import board_from_string, empty_board, legal_moves


@pytest.mark.parametrize("side", [Cell.X, Cell.O])
def test_empty_board_first_move_is_corner(side):
    result = MinimaxStrategy().search(empty_board(), side, 0)
    assert result.move == Move(0, 0)
    assert result.score is None
    assert result.candidates == []


def test_turn_zero_skips_search_even_on_nonempty_board():
    board = board_from_string("_X_/___/___")
    assert MinimaxStrategy().choose_move(board, Cell.O, 0) == OPENING_MOVE


def test_corner_opening_reply_is_center():
    board = board_from_string("X__/___/___")
    assert MinimaxStrategy().choose_move(board, Cell.O, 1) == Move(1, 1)


def test_blocks_open_row():
    board = board_from_string("XX_/_O_/___")
    assert MinimaxStrategy().choose_move(board, Cell.O, 3) == Move(0, 2)


def test_takes_one_of_two_wins():
    board = board_from_string("XX_/XOO/_O_")
    result = MinimaxStrategy().search(board, Cell.X, 6)
    assert result.move in (Move(0, 2), Move(2, 0))
    assert result.score == WIN_SCORE


def test_tie_goes_to_first_candidate():
    # Both wins score exactly WIN_SCORE; (0, 2) comes first in row-major order
    board = board_from_string("XX_/XOO/_O_")
    assert MinimaxStrategy().choose_move(board, Cell.X, 6) == Move(0, 2)


def test_o_takes_immediate_win_over_block():
    # O can win on the middle row; X also threatens the top row
    board = board_from_string("XX_/OO_/X__")
    result = MinimaxStrategy().search(board, Cell.O, 5)
    assert result.move == Move(1, 2)
    assert result.score == -WIN_SCORE


def test_candidates_in_row_major_order():
    board = board_from_string("XX_/XOO/_O_")
    result = MinimaxStrategy().search(board, Cell.X, 6)
    assert [m for m, _ in result.candidates] == legal_moves(board)
    assert not result.fallback


def test_full_board_raises():
    board = board_from_string("XOX/XOO/OXX")
    with pytest.raises(NoLegalMovesError):
        MinimaxStrategy().choose_move(board, Cell.O, 9)


def test_random_fallback_uses_injected_rng(monkeypatch):
    """When no candidate beats the sentinel, the injected RNG picks the move."""
    monkeypatch.setattr(bot_strategy, "minimax", lambda *args, **kwargs: -math.inf)
    board = board_from_string("X__/_O_/___")
    moves = legal_moves(board)

    result = MinimaxStrategy(rng=random.Random(5)).search(board, Cell.X, 2)

    assert result.fallback
    assert result.score is None
    assert result.move == random.Random(5).choice(moves)


def test_random_fallback_deterministic_with_seed(monkeypatch):
    monkeypatch.setattr(bot_strategy, "minimax", lambda *args, **kwargs: math.inf)
    board = board_from_string("X__/_O_/___")
    m1 = MinimaxStrategy(seed=11).choose_move(board, Cell.O, 2)
    m2 = MinimaxStrategy(seed=11).choose_move(board, Cell.O, 2)
    assert m1 == m2
    assert m1 in legal_moves(board)


@pytest.mark.parametrize(
    "text,side,turn",
    [
        ("XX_/_O_/___", Cell.O, 3),
        ("XX_/XOO/_O_", Cell.X, 6),
        ("X_O/_X_/___", Cell.O, 3),
    ],
)
def test_trace_does_not_change_choice(text, side, turn):
    board = board_from_string(text)
    plain = MinimaxStrategy().search(board, side, turn)
    trace = DotTrace()
    traced = MinimaxStrategy().search(board, side, turn, trace=trace)

    assert traced.move == plain.move
    assert traced.score == plain.score
    assert trace.chosen is not None
    assert trace.edges


def test_random_strategy_returns_legal_move():
    board = board_from_string("XO_/_X_/O__")
    strategy = RandomStrategy(seed=123)
    assert strategy.choose_move(board, Cell.O, 5) in legal_moves(board)


def test_random_strategy_deterministic_with_seed():
    board = board_from_string("X__/___/___")
    c1 = RandomStrategy(seed=7).choose_move(board, Cell.O, 1)
    c2 = RandomStrategy(seed=7).choose_move(board, Cell.O, 1)
    assert c1 == c2


def test_random_strategy_full_board_raises():
    with pytest.raises(NoLegalMovesError):
        RandomStrategy().choose_move(board_from_string("XOX/XOO/OXX"), Cell.O, 9)


def test_get_strategy_random():
    s = get_strategy("random")
    assert isinstance(s, RandomStrategy)


def test_get_strategy_minimax():
    s = get_strategy("minimax", seed=3)
    assert isinstance(s, MinimaxStrategy)


def test_get_strategy_unknown_raises():
    with pytest.raises(ValueError, match="Unknown bot_id"):
        get_strategy("does_not_exist")


def test_register_strategy(monkeypatch):
    monkeypatch.setattr(bot_strategy, "_STRATEGY_FACTORIES", dict(bot_strategy._STRATEGY_FACTORIES))
    register_strategy("first-empty", lambda **_kw: _FirstEmpty())

    assert "first-empty" in list_strategies()
    board = board_from_string("X__/___/___")
    assert get_strategy("first-empty").choose_move(board, Cell.O, 1) == Move(0, 1)


class _FirstEmpty:
    def choose_move(self, board, side, turn_number):
        return legal_moves(board)[0]
