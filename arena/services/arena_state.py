# arena/services/arena_state.py
"""Live player and collectible collections for a single arena."""

import random
from typing import Dict, List, Optional

from arena.config.settings import ArenaConfig
from arena.models.entities import Collectible, Player
from arena.utils.helpers import clamp_to_arena


class ArenaState:
    """Single source of truth for the entities in one arena.

    Removing an unknown id is a no-op everywhere. Iteration follows
    insertion order.
    """

    def __init__(self, config: ArenaConfig = None, rng: random.Random = None):
        self.config = config or ArenaConfig.from_settings()
        self.rng = rng or random.Random()
        self.players: Dict[str, Player] = {}
        self.collectibles: Dict[str, Collectible] = {}

    # Players

    def add_player(self, player_id: str, x: int = None, y: int = None) -> Player:
        """Create a player at a random (or given, clamped) position."""
        if player_id in self.players:
            raise ValueError(f"player id already in use: {player_id}")

        cfg = self.config
        if x is None:
            low = min(cfg.player_spawn_margin, cfg.player_max_x)
            x = self.rng.randint(low, max(low, cfg.player_max_x - cfg.player_spawn_margin))
        if y is None:
            low = min(cfg.player_spawn_margin, cfg.player_max_y)
            y = self.rng.randint(low, max(low, cfg.player_max_y - cfg.player_spawn_margin))
        x, y = clamp_to_arena(
            int(x), int(y), cfg.player_size, cfg.width, cfg.height
        )

        player = Player(id=player_id, x=x, y=y, score=0, size=cfg.player_size)
        self.players[player_id] = player
        return player

    def update_player(self, player: Player) -> Optional[Player]:
        """Replace the stored record of a live player."""
        if player.id not in self.players:
            return None
        self.players[player.id] = player
        return player

    def remove_player(self, player_id: str) -> Optional[Player]:
        return self.players.pop(player_id, None)

    def get_player(self, player_id: str) -> Optional[Player]:
        return self.players.get(player_id)

    def list_players(self) -> List[Player]:
        return list(self.players.values())

    @property
    def player_count(self) -> int:
        return len(self.players)

    # Collectibles

    def add_collectible(self, collectible: Collectible) -> Collectible:
        if collectible.id in self.collectibles:
            raise ValueError(f"collectible id already in use: {collectible.id}")
        self.collectibles[collectible.id] = collectible
        return collectible

    def remove_collectible(self, collectible_id: str) -> Optional[Collectible]:
        return self.collectibles.pop(collectible_id, None)

    def get_collectible(self, collectible_id: str) -> Optional[Collectible]:
        return self.collectibles.get(collectible_id)

    def list_collectibles(self) -> List[Collectible]:
        return list(self.collectibles.values())

    @property
    def collectible_count(self) -> int:
        return len(self.collectibles)

    def snapshot(self) -> dict:
        """Wire view of every live player and collectible."""
        return {
            "players": [p.to_wire() for p in self.players.values()],
            "collectibles": [c.to_wire() for c in self.collectibles.values()],
        }
