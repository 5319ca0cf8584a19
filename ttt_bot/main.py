from __future__ import annotations

import argparse
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ttt_bot import __version__
from ttt_bot.api.bot import router as bot_router
from ttt_bot.api.health import router as health_router
from ttt_bot.config import Settings, settings
from ttt_bot.engine.bot_strategy import MinimaxStrategy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    app_settings: Settings = app.state.settings
    logger.info(f"Starting up tic-tac-toe bot v{__version__}...")
    if app_settings.debug:
        logger.info(f"Debug mode: search traces go to {app_settings.dot_path}")
    if not app_settings.secret:
        logger.warning("No shared secret configured; responses will echo an empty secret")

    yield

    logger.info("Tic-tac-toe bot shut down")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings
    app = FastAPI(
        title="ttt-bot",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.strategy = MinimaxStrategy(seed=app_settings.random_seed)

    app.include_router(health_router)
    app.include_router(bot_router)

    return app


app = create_app()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ttt-bot", description="Tic-tac-toe bot server")
    parser.add_argument("-s", "--secret", default=settings.secret or None, required=not settings.secret)
    parser.add_argument("-p", "--port", type=int, default=settings.port)
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("-l", "--log", default=settings.log_level, help="Log level (debug, info, warning, ...)")
    parser.add_argument(
        "-d", "--debug",
        action=argparse.BooleanOptionalAction,
        default=settings.debug,
        help="Write a Graphviz trace of each turn's search",
    )
    parser.add_argument("--dot-path", default=settings.dot_path)
    parser.add_argument("--seed", type=int, default=settings.random_seed)
    return parser


def main(argv: list[str] | None = None) -> None:
    import uvicorn

    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log.upper())

    app_settings = settings.model_copy(
        update={
            "secret": args.secret,
            "host": args.host,
            "port": args.port,
            "log_level": args.log,
            "debug": args.debug,
            "dot_path": args.dot_path,
            "random_seed": args.seed,
        }
    )
    uvicorn.run(
        create_app(app_settings),
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
