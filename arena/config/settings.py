# arena/config/settings.py
"""Arena configuration constants and settings."""

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(f"ARENA_{name}", default))


# Arena settings
ARENA_WIDTH = _env_int("WIDTH", 640)
ARENA_HEIGHT = _env_int("HEIGHT", 480)

# Player settings
PLAYER_SIZE = _env_int("PLAYER_SIZE", 24)
PLAYER_SPAWN_MARGIN = _env_int("PLAYER_SPAWN_MARGIN", 40)
MAX_STEP = _env_int("MAX_STEP", 40)

# Collectible settings
COLLECTIBLE_SIZE = _env_int("COLLECTIBLE_SIZE", 18)
COLLECTIBLE_VALUE = _env_int("COLLECTIBLE_VALUE", 1)
COLLECTIBLE_MARGIN = _env_int("COLLECTIBLE_MARGIN", 20)
MIN_COLLECTIBLES = _env_int("MIN_COLLECTIBLES", 1)

# Server settings
HOST = os.getenv("ARENA_HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)
LOG_LEVEL = os.getenv("ARENA_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ARENA_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

MOVE_DIRECTIONS = ("up", "down", "left", "right")


@dataclass(frozen=True)
class ArenaConfig:
    """Geometry and spawn rules for a single arena."""

    width: int = ARENA_WIDTH
    height: int = ARENA_HEIGHT
    player_size: int = PLAYER_SIZE
    player_spawn_margin: int = PLAYER_SPAWN_MARGIN
    max_step: float = MAX_STEP
    collectible_size: int = COLLECTIBLE_SIZE
    collectible_value: int = COLLECTIBLE_VALUE
    collectible_margin: int = COLLECTIBLE_MARGIN
    min_collectibles: int = MIN_COLLECTIBLES

    def __post_init__(self):
        if self.width < self.player_size or self.height < self.player_size:
            raise ValueError("arena is smaller than a player")
        if self.width - self.collectible_size - 2 * self.collectible_margin < 0:
            raise ValueError("collectible margin leaves no horizontal spawn room")
        if self.height - self.collectible_size - 2 * self.collectible_margin < 0:
            raise ValueError("collectible margin leaves no vertical spawn room")
        if self.max_step <= 0:
            raise ValueError("max_step must be positive")
        if self.collectible_value <= 0:
            raise ValueError("collectible_value must be positive")
        if self.min_collectibles < 1:
            raise ValueError("min_collectibles must be at least 1")

    @property
    def player_max_x(self) -> int:
        return self.width - self.player_size

    @property
    def player_max_y(self) -> int:
        return self.height - self.player_size

    @classmethod
    def from_settings(cls) -> "ArenaConfig":
        """Build the config from the module-level (environment-driven) settings."""
        return cls()


def get_game_config(config: ArenaConfig = None):
    """Get the client-facing game configuration as a dictionary."""
    config = config or ArenaConfig.from_settings()
    return {
        "arenaWidth": config.width,
        "arenaHeight": config.height,
        "playerSize": config.player_size,
        "collectibleSize": config.collectible_size,
        "collectibleValue": config.collectible_value,
        "maxStep": config.max_step,
        "directions": list(MOVE_DIRECTIONS),
    }
