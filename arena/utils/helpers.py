# arena/utils/helpers.py
"""Utility functions and helpers."""

import math
import secrets
import time
import uuid
from typing import Optional


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into the closed range [low, high]."""
    return max(low, min(value, high))


def clamp_to_arena(x: int, y: int, size: int, width: int, height: int) -> tuple:
    """Clamp a top-left position so an entity of `size` stays inside the arena."""
    return (
        clamp(x, 0, width - size),
        clamp(y, 0, height - size),
    )


def is_collision(
    x1: float, y1: float, size1: float, x2: float, y2: float, size2: float
) -> bool:
    """Check if two axis-aligned squares overlap."""
    return x1 < x2 + size2 and x1 + size1 > x2 and y1 < y2 + size2 and y1 + size1 > y2


def to_finite_number(value) -> Optional[float]:
    """Coerce an untrusted value to a finite float, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        # float() would read "1_0" as 10
        if not value or "_" in value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def new_player_id() -> str:
    return str(uuid.uuid4())


def new_collectible_id() -> str:
    """Time-prefixed id with a random suffix, e.g. ``c_1718000000000_3fa2b9c1d0e4``."""
    return f"c_{int(time.time() * 1000)}_{secrets.token_hex(6)}"
