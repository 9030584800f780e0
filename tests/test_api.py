import random

import pytest
from fastapi.testclient import TestClient

from arena.main import create_app
from arena.services.game_service import GameService


@pytest.fixture
def client():
    app = create_app(GameService(rng=random.Random(99)))
    with TestClient(app) as client:
        yield client


def receive_until(ws, message_type):
    """Read frames until one of `message_type` arrives; return the ones skipped too."""
    skipped = []
    while True:
        message = ws.receive_json()
        if message["type"] == message_type:
            return message, skipped
        skipped.append(message)


def test_http_views(client):
    assert client.get("/").json() == {"message": "Arena Server Running"}
    assert client.get("/_api/app-info").json() == {"status": "ok"}

    config = client.get("/api/game/config").json()
    assert (config["arenaWidth"], config["arenaHeight"]) == (640, 480)

    state = client.get("/api/game/state").json()
    assert state["players"] == []
    assert len(state["collectibles"]) >= 1

    assert client.get("/api/game/leaderboard").json() == {"leaderboard": []}
    assert client.get("/api/game/players/nobody/rank").status_code == 404
    assert client.get("/api/game/stats").json() == {
        "totalPlayers": 0,
        "totalCollectibles": 1,
        "activeSessions": 0,
    }


def test_websocket_session(client):
    with client.websocket_connect("/ws") as ws:
        state = ws.receive_json()
        assert state["type"] == "state"
        me = next(p for p in state["players"] if p["id"] == state["playerId"])
        assert state["collectibles"]

        rank = client.get(f"/api/game/players/{me['id']}/rank").json()
        assert rank["label"] == "Rank: 1/1"

        # Malformed input is dropped without a reply or a disconnect.
        ws.send_text("definitely not json")
        ws.send_json({"type": "move", "direction": "left", "pixels": 999})
        ws.send_json({"type": "move", "direction": "down", "pixels": 1})

        moved, skipped = receive_until(ws, "playerMoved")
        assert all(m["type"] == "collectibleTaken" for m in skipped)
        assert (moved["id"], moved["x"], moved["y"]) == (me["id"], me["x"], me["y"] + 1)


def test_join_and_leave_are_broadcast(client):
    with client.websocket_connect("/ws") as first:
        first_state = first.receive_json()

        with client.websocket_connect("/ws") as second:
            second_state = second.receive_json()
            second_id = second_state["playerId"]
            assert {p["id"] for p in second_state["players"]} == {
                first_state["playerId"],
                second_id,
            }

            joined = first.receive_json()
            assert joined["type"] == "playerJoined"
            assert joined["id"] == second_id

        left = first.receive_json()
        assert left == {"type": "playerLeft", "id": second_id}
        assert client.get("/api/game/stats").json()["totalPlayers"] == 1
