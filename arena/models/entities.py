# arena/models/entities.py
"""Arena entity models and data classes."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from arena.config.settings import COLLECTIBLE_SIZE, COLLECTIBLE_VALUE, PLAYER_SIZE


class ArenaInvariantError(RuntimeError):
    """Raised when the arena reaches a state that must never occur."""


@dataclass
class Player:
    """Represents a connected player in the arena."""

    id: str
    x: int
    y: int
    score: int = 0
    size: int = PLAYER_SIZE

    def to_wire(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y, "score": self.score}


@dataclass
class Collectible:
    """Represents an item a player can collect for points."""

    id: str
    x: int
    y: int
    value: int = COLLECTIBLE_VALUE
    size: int = COLLECTIBLE_SIZE

    def to_wire(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y, "value": self.value}


@dataclass
class MoveResult:
    """Outcome of an accepted move command."""

    player: Player
    collected: Optional[Collectible] = None
    spawned: Optional[Collectible] = None


class SessionState(str, Enum):
    CONNECTING = "connecting"
    ACTIVE = "active"
    DISCONNECTED = "disconnected"


@dataclass(eq=False)
class Session:
    """One client connection, mapped 1:1 to one player."""

    connection: Any
    player_id: Optional[str] = None
    state: SessionState = SessionState.CONNECTING

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE
