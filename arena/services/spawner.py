# arena/services/spawner.py
"""Collectible spawning."""

import logging
import random
from typing import Callable, List

from arena.config.settings import ArenaConfig
from arena.models.entities import Collectible
from arena.utils.helpers import new_collectible_id

logger = logging.getLogger(__name__)


class Spawner:
    """Creates collectibles at random positions inside the spawn bounds."""

    def __init__(
        self,
        config: ArenaConfig = None,
        rng: random.Random = None,
        id_factory: Callable[[], str] = new_collectible_id,
    ):
        self.config = config or ArenaConfig.from_settings()
        self.rng = rng or random.Random()
        self.id_factory = id_factory

    def spawn(self) -> Collectible:
        """Spawn a single collectible at a random position."""
        cfg = self.config
        margin = cfg.collectible_margin
        size = cfg.collectible_size
        return Collectible(
            id=self.id_factory(),
            x=self.rng.randint(margin, cfg.width - size - margin),
            y=self.rng.randint(margin, cfg.height - size - margin),
            value=cfg.collectible_value,
            size=size,
        )

    def ensure_minimum(self, state) -> List[Collectible]:
        """Top the arena up to the configured minimum population."""
        spawned = []
        while state.collectible_count < self.config.min_collectibles:
            collectible = state.add_collectible(self.spawn())
            spawned.append(collectible)
        if spawned:
            logger.debug("Spawned %d collectible(s)", len(spawned))
        return spawned
