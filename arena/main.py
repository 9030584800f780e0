# arena/main.py
"""Application entry point for the arena server."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arena.api.routes import GameAPI
from arena.config.settings import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from arena.services.game_service import GameService
from arena.services.websocket_service import WebSocketService

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def create_app(game_service: GameService = None) -> FastAPI:
    """Build the FastAPI app around one arena.

    The arena is seeded with collectibles here, before the app can accept
    any connection.
    """
    game_service = game_service or GameService()
    websocket_service = WebSocketService(game_service)

    app = FastAPI(title="Arena Server")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    api = GameAPI(game_service, websocket_service)
    app.include_router(api.router)

    app.state.game_service = game_service
    app.state.websocket_service = websocket_service
    return app


def run():
    import uvicorn

    configure_logging()
    logger.info("Starting arena server on %s:%d", HOST, PORT)
    uvicorn.run(create_app(), host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
