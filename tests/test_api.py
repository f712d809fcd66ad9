"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_replay.config import ServiceConfig
from snake_replay.server import routes
from snake_replay.server.app import create_app

BASE = "http://test"

GAME_OVER = "Game is over, snake went out of bounds or made an invalid move."
NOT_FOUND = (
    "Fruit not found, the ticks do not lead the snake to the fruit position."
)


def _game_state(**overrides) -> dict:
    body = {
        "gameId": "valid-game-id",
        "width": 10,
        "height": 10,
        "score": 0,
        "fruit": {"x": 1, "y": 1},
        "snake": {"x": 0, "y": 0, "velX": 1, "velY": 0},
        "ticks": [{"velX": 1, "velY": 0}, {"velX": 0, "velY": 1}],
    }
    body.update(overrides)
    return body


@pytest.fixture()
def app():
    return create_app(ServiceConfig(seed=7))


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


class TestNewGame:
    @pytest.mark.asyncio
    async def test_create(self, client):
        resp = await client.get("/newGame", params={"w": "10", "h": "10"})
        assert resp.status_code == 200
        data = resp.json()
        assert "gameId" in data
        assert data["width"] == 10
        assert data["height"] == 10
        assert data["score"] == 0
        assert 0 <= data["fruit"]["x"] < 10
        assert 0 <= data["fruit"]["y"] < 10
        assert data["snake"] == {"x": 0, "y": 0, "velX": 1, "velY": 0}
        assert "ticks" not in data

    @pytest.mark.asyncio
    async def test_game_ids_differ(self, client):
        a = await client.get("/newGame", params={"w": "5", "h": "5"})
        b = await client.get("/newGame", params={"w": "5", "h": "5"})
        assert a.json()["gameId"] != b.json()["gameId"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"w": "-1", "h": "10"},
            {"w": "10", "h": "0"},
            {"w": "abc", "h": "3"},
            {"w": str(10**20), "h": "3"},
            {},
        ],
    )
    async def test_invalid_size(self, client, params):
        resp = await client.get("/newGame", params=params)
        assert resp.status_code == 400
        assert resp.json()["message"] == (
            "Invalid request, width and height must be positive numbers."
        )

    @pytest.mark.asyncio
    async def test_configured_initial_velocity(self):
        app = create_app(ServiceConfig(initial_velocity=(0, 1)))
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url=BASE) as c:
            resp = await c.get("/newGame", params={"w": "4", "h": "4"})
        assert resp.json()["snake"]["velY"] == 1


class TestValidateGame:
    @pytest.mark.asyncio
    async def test_fruit_reached(self, client):
        resp = await client.post("/validateGame", json=_game_state())
        assert resp.status_code == 200
        data = resp.json()
        assert data["gameId"] == "valid-game-id"
        assert data["width"] == 10
        assert data["height"] == 10
        assert data["score"] == 1
        assert data["fruit"] != {"x": 1, "y": 1}
        assert data["snake"] == {"x": 1, "y": 1, "velX": 0, "velY": 1}
        assert "ticks" not in data

    @pytest.mark.asyncio
    async def test_returned_state_can_be_resubmitted(self, client):
        first = (await client.post("/validateGame", json=_game_state())).json()
        # Snake now heads +y, so reversing is game over whatever the fruit.
        resubmitted = {**first, "ticks": [{"velX": 0, "velY": -1}]}
        resp = await client.post("/validateGame", json=resubmitted)
        assert resp.status_code == 418

    @pytest.mark.asyncio
    async def test_ticks_do_not_reach_fruit(self, client):
        resp = await client.post(
            "/validateGame", json=_game_state(ticks=[{"velX": 1, "velY": 0}]),
        )
        assert resp.status_code == 404
        assert resp.json()["message"] == NOT_FOUND

    @pytest.mark.asyncio
    async def test_out_of_bounds(self, client):
        resp = await client.post(
            "/validateGame", json=_game_state(ticks=[{"velX": 0, "velY": -1}]),
        )
        assert resp.status_code == 418
        assert resp.json()["message"] == GAME_OVER

    @pytest.mark.asyncio
    async def test_invalid_move(self, client):
        resp = await client.post(
            "/validateGame", json=_game_state(ticks=[{"velX": 1, "velY": 1}]),
        )
        assert resp.status_code == 418
        assert resp.json()["message"] == GAME_OVER

    @pytest.mark.asyncio
    async def test_missing_field(self, client):
        body = _game_state()
        del body["score"]
        resp = await client.post("/validateGame", json=body)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Missing fields in request body"

    @pytest.mark.asyncio
    async def test_aggregated_violations(self, client):
        body = _game_state(height=-10, ticks=[])
        del body["score"]
        resp = await client.post("/validateGame", json=body)
        assert resp.status_code == 400
        assert resp.json()["message"] == (
            "Missing fields in request body, Invalid width or height, "
            "Ticks are not specified"
        )

    @pytest.mark.asyncio
    async def test_oversized_field(self, client):
        body = _game_state(width=10**20, height=10**20)
        resp = await client.post("/validateGame", json=body)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid width or height"

    @pytest.mark.asyncio
    async def test_unrelated_body(self, client):
        resp = await client.post("/validateGame", json={"invalidData": True})
        assert resp.status_code == 400
        assert resp.json()["message"].startswith("Missing fields")

    @pytest.mark.asyncio
    async def test_body_not_an_object(self, client):
        resp = await client.post("/validateGame", json=[1, 2, 3])
        assert resp.status_code == 400
        assert resp.json()["message"] == "Malformed request body."

    @pytest.mark.asyncio
    async def test_body_not_json(self, client):
        resp = await client.post(
            "/validateGame",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Malformed request body."


class TestMethodNotAllowed:
    @pytest.mark.asyncio
    async def test_post_new_game(self, client):
        resp = await client.post("/newGame")
        assert resp.status_code == 405
        assert resp.json()["message"] == "Method not allowed."

    @pytest.mark.asyncio
    async def test_get_validate_game(self, client):
        resp = await client.get("/validateGame")
        assert resp.status_code == 405
        assert resp.json()["message"] == "Method not allowed."


class TestInternalError:
    @pytest.mark.asyncio
    async def test_unhandled_exception(self, app, monkeypatch):
        def _boom(payload, spawner):
            raise RuntimeError("boom")

        monkeypatch.setattr(routes, "check_and_replay", _boom)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url=BASE) as c:
            resp = await c.post("/validateGame", json=_game_state())
        assert resp.status_code == 500
        assert resp.json()["message"] == "Internal server error."


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
