from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, StrictInt, field_validator

from ttt_bot.engine.errors import InvalidBoardError
from ttt_bot.engine.models import Board, Cell
from ttt_bot.games.tictactoe.board import parse_board

GAME_NAME = "tic-tac-toe"


class LastTurn(BaseModel):
    turn_number: int
    player_id: int | None = None
    ego: bool = False
    figure: Literal["X", "O"]
    move: tuple[int, int]


class TurnRequest(BaseModel):
    """Body of a ``turn`` request sent by the game server."""

    game_id: int | str | None = None
    turn_number: int = Field(ge=0)
    figure: Literal["X", "O"]
    board: list[list[StrictInt]]
    last_turns: list[LastTurn] = Field(default_factory=list)

    @field_validator("board")
    @classmethod
    def _check_board(cls, v: list[list[int]]) -> list[list[int]]:
        try:
            parse_board(v)
        except InvalidBoardError as e:
            raise ValueError(e.message) from e
        return v

    @property
    def side(self) -> Cell:
        return Cell.from_symbol(self.figure)

    def to_board(self) -> Board:
        return parse_board(self.board)


class StatusResponse(BaseModel):
    status: str = "ok"
    game: str = GAME_NAME
    version: str
    secret: str
    message: str = "I'm ready!"


class StartResponse(BaseModel):
    status: str = "ok"
    game: str = GAME_NAME
    version: str
    secret: str
    accept: bool = True
    message: str = "Let's go!"


class TurnResponse(BaseModel):
    status: str = "ok"
    game: str = GAME_NAME
    version: str
    secret: str
    move: tuple[int, int]


class MessageResponse(BaseModel):
    status: str
    message: str
