# arena/services/movement.py
"""Movement and collision resolution.

Everything here is a pure function of its arguments: the caller owns the
arena state and decides what to do with the results.
"""

from dataclasses import replace
from typing import Iterable, Optional

from arena.config.settings import MOVE_DIRECTIONS, ArenaConfig
from arena.models.entities import Collectible, Player
from arena.utils.helpers import clamp_to_arena, is_collision, to_finite_number

_AXIS_DELTAS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def validate_move(direction, distance, max_step: float) -> Optional[float]:
    """Return the step length for a well-formed command, else None."""
    if not isinstance(direction, str) or direction not in MOVE_DIRECTIONS:
        return None
    step = to_finite_number(distance)
    if step is None or step <= 0 or step > max_step:
        return None
    return step


def apply_move(
    player: Player, direction, distance, config: ArenaConfig
) -> Optional[Player]:
    """Move a player one step, clamped into the arena.

    Returns the updated player, or None when the command is malformed. The
    input player is never modified.
    """
    step = validate_move(direction, distance, config.max_step)
    if step is None:
        return None

    dx, dy = _AXIS_DELTAS[direction]
    x = int(round(player.x + dx * step))
    y = int(round(player.y + dy * step))
    x, y = clamp_to_arena(x, y, player.size, config.width, config.height)
    return replace(player, x=x, y=y)


def find_collision(
    player: Player, collectibles: Iterable[Collectible]
) -> Optional[Collectible]:
    """First collectible overlapping the player's bounding box, if any.

    Scanning stops at the first hit, so a single move never collects more
    than one item even when several overlap.
    """
    for collectible in collectibles:
        if is_collision(
            player.x, player.y, player.size,
            collectible.x, collectible.y, collectible.size,
        ):
            return collectible
    return None
