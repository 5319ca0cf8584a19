"""Graphviz trace of the first search plies, written when the bot runs in debug mode."""

from __future__ import annotations

from pathlib import Path

from ttt_bot.engine.models import Board
from ttt_bot.games.tictactoe.board import board_to_string


def _node(board: Board) -> str:
    return '"' + board_to_string(board).replace("\n", "\\n") + '"'


class DotTrace:
    """Collects (board, child, score) edges and renders them as a digraph."""

    def __init__(self) -> None:
        self.edges: list[tuple[Board, Board, int]] = []
        self._chosen: tuple[Board, Board, int | None] | None = None

    def record(self, board: Board, child: Board, score: int) -> None:
        self.edges.append((board, child, score))

    def mark_chosen(self, board: Board, child: Board, score: int | None) -> None:
        self._chosen = (board, child, score)

    @property
    def chosen(self) -> tuple[Board, Board, int | None] | None:
        return self._chosen

    def render(self) -> str:
        lines = ["digraph G {"]
        for board, child, score in self.edges:
            lines.append(f'{_node(board)} -> {_node(child)} [label="{score}"]')
        if self._chosen is not None:
            board, child, score = self._chosen
            label = "" if score is None else score
            lines.append(
                f'{_node(board)} -> {_node(child)} [label="{label}" color="red"]'
            )
        lines.append("}")
        return "\n".join(lines) + "\n"

    def write(self, path: str | Path) -> None:
        """Truncate *path* and write the rendered graph."""
        Path(path).write_text(self.render(), encoding="utf-8")
