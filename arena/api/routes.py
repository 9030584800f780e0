# arena/api/routes.py
"""API routes for the arena server."""

from fastapi import APIRouter, HTTPException, WebSocket
from arena.services.game_service import GameService
from arena.services.websocket_service import WebSocketService
from arena.config.settings import get_game_config


class GameAPI:
    """Read-only views of the arena, plus the WebSocket endpoint."""

    def __init__(self, game_service: GameService, websocket_service: WebSocketService):
        self.game_service = game_service
        self.websocket_service = websocket_service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Set up all API routes."""

        @self.router.get("/")
        async def root():
            """Root endpoint."""
            return {"message": "Arena Server Running"}

        @self.router.get("/_api/app-info")
        async def app_info():
            """Health probe."""
            return {"status": "ok"}

        @self.router.get("/api/game/config")
        async def get_game_config_endpoint():
            return get_game_config(self.game_service.config)

        @self.router.get("/api/game/state")
        async def get_state():
            """Same payload a client receives on join."""
            return self.game_service.snapshot()

        @self.router.get("/api/game/leaderboard")
        async def get_leaderboard():
            return {"leaderboard": self.game_service.get_leaderboard()}

        @self.router.get("/api/game/players/{player_id}/rank")
        async def get_player_rank(player_id: str):
            result = self.game_service.get_rank(player_id)
            if result is None:
                raise HTTPException(status_code=404, detail="Player not found")
            return result

        @self.router.get("/api/game/stats")
        async def get_game_stats():
            return {
                "totalPlayers": self.game_service.state.player_count,
                "totalCollectibles": self.game_service.state.collectible_count,
                "activeSessions": len(self.websocket_service.active_sessions),
            }

        @self.router.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            await self.websocket_service.handle_connection(websocket)
