"""Bot-vs-Bot arena: run N tic-tac-toe games between strategies and report results."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from ttt_bot.engine.bot_strategy import BotStrategy
from ttt_bot.engine.errors import GameEngineError
from ttt_bot.engine.models import Board, Cell, Outcome, opponent
from ttt_bot.games.tictactoe.board import (
    empty_board,
    evaluate_winner,
    is_full,
    legal_moves,
    place,
)

SEATS = (Cell.X, Cell.O)


@dataclass
class ArenaResult:
    """Aggregated results from an arena run."""

    num_games: int
    wins: dict[str, int]
    draws: int
    game_durations_ms: list[float]
    final_boards: list[Board] = field(default_factory=list)

    def losses(self, name: str) -> int:
        return self.num_games - self.draws - self.wins.get(name, 0)

    def summary(self) -> str:
        lines = [f"Arena Results ({self.num_games} games)", "=" * 40]
        for name, won in self.wins.items():
            lines.append(f"  {name:>12s}: {won:3d} W  {self.losses(name):3d} L")
        lines.append(f"  {'Draws':>12s}: {self.draws:3d}")
        if self.game_durations_ms:
            total_s = sum(self.game_durations_ms) / 1000
            lines.append(f"  Total: {total_s:.1f}s")
        return "\n".join(lines)


def run_arena(
    strategies: dict[str, BotStrategy],
    num_games: int = 100,
    alternate_seats: bool = True,
    progress_callback: Callable[[int, int], None] | None = None,
) -> ArenaResult:
    """Run *num_games* between two strategies and return aggregated stats.

    Parameters
    ----------
    strategies:
        Mapping of ``strategy_name -> BotStrategy``.  Must have exactly two
        entries; the first plays X in game 0.
    num_games:
        How many games to play.
    alternate_seats:
        Swap X and O each game so both strategies open equally often.
    progress_callback:
        Called with ``(games_completed, total_games)`` after each game.
    """
    strategy_names = list(strategies.keys())
    assert len(strategy_names) == len(SEATS), (
        f"Need exactly {len(SEATS)} strategies, got {len(strategy_names)}"
    )

    result = ArenaResult(
        num_games=num_games,
        wins={n: 0 for n in strategy_names},
        draws=0,
        game_durations_ms=[],
    )

    for game_idx in range(num_games):
        if alternate_seats:
            seat_assignment = [
                strategy_names[(i + game_idx) % len(SEATS)]
                for i in range(len(SEATS))
            ]
        else:
            seat_assignment = strategy_names[:]

        side_to_name = dict(zip(SEATS, seat_assignment))

        t0 = time.monotonic()
        final_board, outcome = play_game(
            {side: strategies[name] for side, name in side_to_name.items()}
        )
        result.game_durations_ms.append((time.monotonic() - t0) * 1000)
        result.final_boards.append(final_board)

        if outcome == Outcome.NONE:
            result.draws += 1
        else:
            winner = side_to_name[Cell.X if outcome == Outcome.X_WINS else Cell.O]
            result.wins[winner] += 1

        if progress_callback:
            progress_callback(game_idx + 1, num_games)

    return result


def play_game(players: dict[Cell, BotStrategy]) -> tuple[Board, Outcome]:
    """Play a single game from the empty board; X moves first."""
    board = empty_board()
    side = Cell.X
    turn_number = 0

    while evaluate_winner(board) == Outcome.NONE and not is_full(board):
        move = players[side].choose_move(board, side, turn_number)
        if move not in legal_moves(board):
            raise GameEngineError(
                f"{side.symbol} chose illegal move {tuple(move)} on turn {turn_number}"
            )
        board = place(board, move, side)
        side = opponent(side)
        turn_number += 1

    return board, evaluate_winner(board)
