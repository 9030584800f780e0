import itertools
import random

import pytest

from arena.config.settings import ArenaConfig
from arena.models.entities import Collectible
from arena.services.arena_state import ArenaState
from arena.services.game_service import GameService
from arena.services.spawner import Spawner


class FakeSocket:
    """In-memory stand-in for a WebSocket connection."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail
        self.closed = False

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(message)

    async def close(self):
        self.closed = True

    def types(self):
        return [m["type"] for m in self.sent]

    def of_type(self, message_type):
        return [m for m in self.sent if m["type"] == message_type]


def counter_ids(prefix):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def config():
    return ArenaConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def state(config, rng):
    return ArenaState(config, rng)


@pytest.fixture
def spawner(config, rng):
    return Spawner(config, rng, id_factory=counter_ids("c"))


@pytest.fixture
def make_game(config, rng):
    """Build a GameService whose only collectibles are the ones given."""

    def _make(collectibles=()):
        state = ArenaState(config, rng)
        for collectible in collectibles:
            state.add_collectible(collectible)
        spawner = Spawner(config, rng, id_factory=counter_ids("spawned-"))
        return GameService(
            config=config,
            state=state,
            spawner=spawner,
            player_id_factory=counter_ids("p"),
        )

    return _make


@pytest.fixture
def far_collectible():
    # Bottom-right corner; no player placed by the tests reaches it.
    return Collectible(id="far", x=600, y=440)
