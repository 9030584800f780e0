# arena/services/websocket_service.py
"""WebSocket session management and arena synchronization."""

import asyncio
import json
import logging
from typing import Dict, List, Optional

from fastapi import WebSocket, WebSocketDisconnect

from arena.models.entities import (
    ArenaInvariantError,
    MoveResult,
    Player,
    Session,
    SessionState,
)
from .game_service import GameService

logger = logging.getLogger(__name__)


class WebSocketService:
    """Keeps every connected client in sync with one arena.

    Each session goes CONNECTING -> ACTIVE -> DISCONNECTED. Every event
    (join, move, leave) mutates the arena and sends its messages while
    holding the arena lock, so clients see deltas in mutation order.
    """

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.sessions: Dict[object, Session] = {}
        self._lock = asyncio.Lock()

    @property
    def active_sessions(self) -> List[Session]:
        return [s for s in self.sessions.values() if s.is_active]

    async def handle_connection(self, websocket: WebSocket):
        """Run one client connection from accept to disconnect."""
        await websocket.accept()
        logger.info("WebSocket connection accepted for %s", websocket.client)

        session = await self.connect(websocket)
        try:
            while session.is_active:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes")
                await self.handle_message(session, raw)
        except WebSocketDisconnect:
            pass
        except ArenaInvariantError:
            logger.critical("Arena invariant broken while serving %s", session.player_id)
            raise
        except Exception:
            logger.exception("WebSocket error for player %s", session.player_id)
        finally:
            await self.disconnect(session)

    # Lifecycle

    async def connect(self, connection) -> Session:
        """Register a connection, send it the snapshot, then announce it."""
        async with self._lock:
            session = Session(connection=connection)
            self.sessions[connection] = session
            try:
                player = self.game_service.create_player()
                session.player_id = player.id
                session.state = SessionState.ACTIVE

                if not await self._send(session, self._state_message(player)):
                    await self._drop([session])
                    return session

                failed = await self._broadcast(self._player_message("playerJoined", player), exclude=session)
                await self._drop(failed)
            except BaseException:
                await self._drop([session], close=False)
                raise
            return session

    async def disconnect(self, session: Session):
        async with self._lock:
            await self._drop([session], close=False)

    # Inbound

    async def handle_message(self, session: Session, raw):
        """Decode one inbound frame; anything unrecognised is dropped."""
        if not session.is_active:
            return

        if isinstance(raw, (str, bytes)):
            try:
                data = json.loads(raw)
            except ValueError:
                logger.debug("Dropped non-JSON frame from %s", session.player_id)
                return
        else:
            data = raw

        if not isinstance(data, dict):
            return

        message_type = data.get("type")
        if message_type == "move":
            await self.handle_move(session, data.get("direction"), data.get("pixels"))
        else:
            logger.debug("Dropped %r message from %s", message_type, session.player_id)

    async def handle_move(self, session: Session, direction, pixels) -> Optional[MoveResult]:
        async with self._lock:
            if not session.is_active:
                return None

            result = self.game_service.move_player(session.player_id, direction, pixels)
            if result is None:
                return None

            failed = []
            if result.collected is not None:
                failed += await self._broadcast(self._collectible_taken_message(result))
            failed += await self._broadcast(self._player_message("playerMoved", result.player))
            await self._drop(failed)
            return result

    # Outbound

    def _state_message(self, player: Player) -> dict:
        return {"type": "state", "playerId": player.id, **self.game_service.snapshot()}

    @staticmethod
    def _player_message(message_type: str, player: Player) -> dict:
        return {"type": message_type, **player.to_wire()}

    @staticmethod
    def _collectible_taken_message(result: MoveResult) -> dict:
        return {
            "type": "collectibleTaken",
            "playerId": result.player.id,
            "collectibleId": result.collected.id,
            "newCollectible": result.spawned.to_wire(),
            "score": result.player.score,
        }

    async def _send(self, session: Session, message: dict) -> bool:
        try:
            await session.connection.send_json(message)
        except Exception as e:
            logger.warning("Send to player %s failed: %s", session.player_id, e)
            return False
        return True

    async def _broadcast(self, message: dict, exclude: Session = None) -> List[Session]:
        """Send to every active session; returns the sessions whose send failed."""
        failed = []
        for session in self.active_sessions:
            if session is exclude:
                continue
            if not await self._send(session, message):
                failed.append(session)
        return failed

    async def _drop(self, sessions: List[Session], close: bool = True):
        """Disconnect sessions, announcing each departure exactly once.

        Announcing a departure can itself fail on other sessions; those are
        queued and dropped in turn. Caller must hold the arena lock.
        """
        pending = [(session, close) for session in sessions]
        while pending:
            session, close = pending.pop(0)
            if session.state is SessionState.DISCONNECTED:
                continue

            session.state = SessionState.DISCONNECTED
            self.sessions.pop(session.connection, None)
            if session.player_id is not None:
                self.game_service.remove_player(session.player_id)

            if close:
                try:
                    await session.connection.close()
                except Exception as e:
                    logger.debug("Close for player %s failed: %s", session.player_id, e)

            if session.player_id is None:
                continue

            logger.info("Player %s disconnected", session.player_id)
            failed = await self._broadcast({"type": "playerLeft", "id": session.player_id})
            pending += [(other, True) for other in failed]
