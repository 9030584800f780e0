# arena/services/game_service.py
"""Core game logic for one arena."""

import logging
import random
from dataclasses import replace
from typing import Callable, List, Optional

from arena.config.settings import ArenaConfig
from arena.models.entities import ArenaInvariantError, MoveResult, Player
from arena.services.arena_state import ArenaState
from arena.services.movement import apply_move, find_collision
from arena.services.ranking import format_rank, leaderboard, rank
from arena.services.spawner import Spawner
from arena.utils.helpers import new_player_id

logger = logging.getLogger(__name__)


class GameService:
    """Applies connect, move and disconnect events to an arena.

    Every public method runs synchronously to completion, so callers on a
    single event loop never observe a half-applied move.
    """

    def __init__(
        self,
        config: ArenaConfig = None,
        state: ArenaState = None,
        spawner: Spawner = None,
        player_id_factory: Callable[[], str] = new_player_id,
        rng: random.Random = None,
    ):
        self.config = config or ArenaConfig.from_settings()
        rng = rng or random.Random()
        self.state = state or ArenaState(self.config, rng)
        self.spawner = spawner or Spawner(self.config, rng)
        self.player_id_factory = player_id_factory

        self._initialize_world()

    def _initialize_world(self):
        """Seed the arena so at least one collectible exists before anyone joins."""
        self.spawner.ensure_minimum(self.state)
        self._check_population()

    def _check_population(self):
        if self.state.collectible_count < 1:
            raise ArenaInvariantError("arena has no collectibles")

    # Players

    def create_player(self, player_id: str = None) -> Player:
        """Create a new player at a random position."""
        player_id = player_id or self.player_id_factory()
        player = self.state.add_player(player_id)
        logger.info("Player %s joined at (%d, %d)", player.id, player.x, player.y)
        return player

    def remove_player(self, player_id: str) -> Optional[Player]:
        player = self.state.remove_player(player_id)
        if player:
            logger.info("Player %s left with score %d", player.id, player.score)
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        return self.state.get_player(player_id)

    def move_player(self, player_id: str, direction, distance) -> Optional[MoveResult]:
        """Apply a move command and resolve at most one collection.

        Returns None when the command is dropped (unknown player or
        malformed command); nothing in the arena changes in that case.
        """
        player = self.state.get_player(player_id)
        if player is None:
            logger.debug("Dropped move for unknown player %s", player_id)
            return None

        moved = apply_move(player, direction, distance, self.config)
        if moved is None:
            logger.debug(
                "Dropped malformed move from %s: direction=%r pixels=%r",
                player_id, direction, distance,
            )
            return None

        result = MoveResult(player=moved)
        collected = find_collision(moved, self.state.list_collectibles())
        if collected is not None:
            self.state.remove_collectible(collected.id)
            moved = replace(moved, score=moved.score + collected.value)
            spawned = self.state.add_collectible(self.spawner.spawn())
            self._check_population()
            result = MoveResult(player=moved, collected=collected, spawned=spawned)
            logger.info(
                "Player %s collected %s (score=%d)",
                moved.id, collected.id, moved.score,
            )

        self.state.update_player(moved)
        return result

    # Views

    def snapshot(self) -> dict:
        return self.state.snapshot()

    def get_all_players(self) -> List[dict]:
        return [p.to_wire() for p in self.state.list_players()]

    def get_all_collectibles(self) -> List[dict]:
        return [c.to_wire() for c in self.state.list_collectibles()]

    def get_rank(self, player_id: str) -> Optional[dict]:
        player = self.state.get_player(player_id)
        if player is None:
            return None
        position, total = rank(player, self.state.list_players())
        return {
            "id": player.id,
            "position": position,
            "total": total,
            "label": format_rank(position, total),
        }

    def get_leaderboard(self) -> List[dict]:
        return leaderboard(self.state.list_players())
