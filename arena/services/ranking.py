# arena/services/ranking.py
"""Leaderboard ordering."""

from typing import Iterable, List, Tuple

from arena.models.entities import Player


def _ordering_key(player: Player):
    return (-player.score, str(player.id))


def sort_players(players: Iterable[Player]) -> List[Player]:
    """Score descending, ties broken by id so the order never depends on insertion."""
    return sorted(players, key=_ordering_key)


def rank(player: Player, all_players: Iterable[Player]) -> Tuple[int, int]:
    """Return (position, total) of `player` among `all_players`.

    A player missing from the list is placed last rather than raising.
    """
    ordered = sort_players(all_players)
    total = max(1, len(ordered))
    for index, other in enumerate(ordered):
        if str(other.id) == str(player.id):
            return index + 1, total
    return total, total


def format_rank(position: int, total: int) -> str:
    return f"Rank: {position}/{total}"


def leaderboard(players: Iterable[Player]) -> List[dict]:
    return [
        {"rank": index + 1, "id": player.id, "score": player.score}
        for index, player in enumerate(sort_players(players))
    ]
