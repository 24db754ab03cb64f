"""End-to-end tests for the REST API (FastAPI TestClient)."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from delve.api.app import create_app
from delve.api.routes.map import encode_rle
from delve.config import LevelConfig

CFG = LevelConfig(seed=42, width=40, height=24, agent_count=3, agent_speed=1.0,
                  spawn_min_player_distance=3, spawn_min_spacing=2, log_level="WARNING")


@pytest.fixture()
def client():
    with TestClient(create_app(CFG)) as c:
        yield c


class TestEncodeRle:
    def test_runs(self):
        assert encode_rle((False, False, True, False)) == [0, 2, 1, 1, 0, 1]

    def test_empty(self):
        assert encode_rle(()) == []


class TestMapRoutes:
    def test_map(self, client):
        data = client.get("/api/v1/map").json()
        assert (data["width"], data["height"], data["seed"]) == (40, 24, 42)
        assert sum(data["grid"][1::2]) == 40 * 24
        assert data["grid"][0] == 0

    def test_rooms(self, client):
        data = client.get("/api/v1/rooms").json()
        assert data["count"] == len(data["rooms"])
        sizes = {r["id"]: r["size"] for r in data["rooms"]}
        assert sizes[data["largest_room_id"]] == max(sizes.values())


class TestQueryRoutes:
    def test_walkable_out_of_bounds(self, client):
        data = client.get("/api/v1/walkable", params={"x": -5, "y": 3}).json()
        assert data["walkable"] is False
        assert data["room_id"] is None

    def test_path_and_nearby(self, client):
        state = client.get("/api/v1/state").json()
        player = state["player"]
        agent = state["agents"][0]
        resp = client.get("/api/v1/path", params={
            "from_x": agent["x"], "from_y": agent["y"], "to_x": player["x"], "to_y": player["y"],
        })
        assert resp.status_code == 200
        step = resp.json()["step"]
        if step is not None:
            assert abs(step["x"] - agent["x"]) + abs(step["y"] - agent["y"]) == 1

        nearby = client.get("/api/v1/nearby", params={"x": player["x"], "y": player["y"], "radius": 0}).json()
        assert nearby["entity_ids"] == [0]

    def test_nearby_rejects_negative_radius(self, client):
        resp = client.get("/api/v1/nearby", params={"x": 1, "y": 1, "radius": -1})
        assert resp.status_code == 422


class TestControlRoutes:
    def test_step_advances_tick(self, client):
        resp = client.post("/api/v1/control/step", params={"count": 3})
        assert resp.json()["tick"] == 3
        assert client.get("/api/v1/state").json()["tick"] == 3

    def test_reset(self, client):
        client.post("/api/v1/control/step")
        resp = client.post("/api/v1/control/reset")
        assert resp.json()["status"] == "ok"
        assert client.get("/api/v1/state").json()["tick"] == 0

    def test_regenerate_level(self, client):
        client.post("/api/v1/level", json={"seed": 7})
        data = client.get("/api/v1/map").json()
        assert data["seed"] == 7
        assert client.get("/api/v1/state").json()["floor_number"] == 2

    def test_regenerate_defaults_to_next_seed(self, client):
        client.post("/api/v1/level", json={})
        assert client.get("/api/v1/map").json()["seed"] == 43

    def test_player_on_wall_rejected(self, client):
        resp = client.post("/api/v1/player", json={"x": 0, "y": 0})
        assert resp.status_code == 422

    def test_unknown_action(self, client):
        assert client.post("/api/v1/control/explode").status_code == 422


class TestStateRoutes:
    def test_events_and_cache(self, client):
        client.post("/api/v1/control/step", params={"count": 5})
        events = client.get("/api/v1/events").json()
        assert any(e["category"] == "level" for e in events)
        cache = client.get("/api/v1/cache").json()
        assert cache["capacity"] == CFG.path_cache_capacity
        assert cache["searches"] >= 0

    def test_config(self, client):
        data = client.get("/api/v1/config").json()
        assert data["width"] == 40
        assert data["path_cache_policy"] == "clear_on_full"
