"""Game-server protocol: a single POST endpoint dispatched on the ``method`` query parameter."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from ttt_bot import __version__
from ttt_bot.api.schemas import (
    MessageResponse,
    StartResponse,
    StatusResponse,
    TurnRequest,
    TurnResponse,
)
from ttt_bot.config import Settings
from ttt_bot.engine.bot_strategy import MinimaxStrategy
from ttt_bot.engine.errors import NoLegalMovesError
from ttt_bot.engine.models import SearchResult
from ttt_bot.engine.trace import DotTrace

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bot"])


@router.get("/", response_class=PlainTextResponse)
async def hello() -> str:
    return "Tic Tac Toe Bot!"


@router.post("/")
async def handle_request(method: str, request: Request) -> dict:
    """Dispatch a game-server call; the raw body is only read by ``turn`` and ``error``."""
    settings: Settings = request.app.state.settings
    body = (await request.body()).decode("utf-8", errors="replace")

    if method == "status":
        return handle_status(settings).model_dump()
    if method == "start":
        return handle_start(settings).model_dump()
    if method == "finish":
        return handle_finish().model_dump()
    if method == "error":
        return handle_error(body).model_dump()
    if method == "turn":
        response = await run_in_threadpool(
            handle_turn, body, settings, request.app.state.strategy
        )
        return response.model_dump()

    raise HTTPException(status_code=400, detail=f"Unknown method: {method}")


def handle_status(settings: Settings) -> StatusResponse:
    logger.info("Handling status request")
    return StatusResponse(version=__version__, secret=settings.secret)


def handle_start(settings: Settings) -> StartResponse:
    logger.info("Handling start request")
    return StartResponse(version=__version__, secret=settings.secret)


def handle_finish() -> MessageResponse:
    logger.info("Handling finish request")
    return MessageResponse(status="ok", message="Game finished!")


def handle_error(body: str) -> MessageResponse:
    logger.info(f"Handling error request: {body}")
    return MessageResponse(status="error", message="Invalid request!")


def handle_turn(body: str, settings: Settings, strategy: MinimaxStrategy) -> TurnResponse:
    """Parse a turn body, run the search and build the reply.

    Runs in a worker thread; raises ``HTTPException`` for bodies the engine
    must not see.
    """
    logger.info("Handling turn request")
    try:
        turn = TurnRequest.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid turn request: {e}")

    result = play_turn(turn, settings, strategy)
    return TurnResponse(
        version=__version__,
        secret=settings.secret,
        move=(result.move.row, result.move.col),
    )


def play_turn(turn: TurnRequest, settings: Settings, strategy: MinimaxStrategy) -> SearchResult:
    trace = DotTrace() if settings.debug else None
    try:
        result = strategy.search(turn.to_board(), turn.side, turn.turn_number, trace=trace)
    except NoLegalMovesError:
        raise HTTPException(status_code=409, detail="No legal moves")

    if trace is not None:
        trace.write(settings.dot_path)
        logger.debug(f"Search trace written to {settings.dot_path}")
    return result
