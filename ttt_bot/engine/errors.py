from __future__ import annotations


class GameEngineError(Exception):
    """Base class for engine errors."""
    pass


class InvalidBoardError(GameEngineError):
    """Board data has the wrong shape or holds an unknown mark."""

    def __init__(self, message: str, rows: object | None = None):
        self.message = message
        self.rows = rows
        super().__init__(message)


class NoLegalMovesError(GameEngineError):
    """Move selection was requested on a board with no empty cell."""
    pass
