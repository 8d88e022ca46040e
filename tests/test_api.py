"""
Tests for the Woodland engine HTTP API.

Every request carries the full state, so tests start a scenario and feed
the returned state into the next call.
"""

import pytest
from fastapi.testclient import TestClient

from woodland.api.server import create_app


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_client(event_bus):
    """Test client with seeded dice and a private event bus."""
    app = create_app({"dice_seed": 3}, bus=event_bus)
    return TestClient(app)


@pytest.fixture
def dominion(api_client):
    """Eyrie Dominion state as JSON."""
    response = api_client.post("/scenarios/0")
    assert response.status_code == 200
    return response.json()["state"]


# -----------------------------------------------------------------------------
# Meta
# -----------------------------------------------------------------------------

class TestHealthCheck:
    """Tests for health check endpoint."""

    def test_health_check_returns_ok(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "woodland-engine"


class TestScenarios:
    """Tests for scenario endpoints."""

    def test_list(self, api_client):
        response = api_client.get("/scenarios")
        assert response.status_code == 200
        assert [s["title"] for s in response.json()] == ["Eyrie Dominion", "Martial Law", "Conquerors"]

    def test_start(self, api_client):
        response = api_client.post("/scenarios/1")
        data = response.json()
        assert data["scenario"]["title"] == "Martial Law"
        assert data["state"]["turn"]["action_substep"] == "recruit"

    def test_unknown_falls_back(self, api_client):
        response = api_client.post("/scenarios/9")
        assert response.json()["scenario"]["title"] == "Eyrie Dominion"


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------

class TestActionEndpoints:
    """Tests for the per-action endpoints."""

    def test_move(self, api_client, dominion):
        response = api_client.post("/game/move", json={
            "state": dominion, "faction": "marquise", "from": "c1", "to": "c2", "warriors": 2,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["moved"] == 2
        assert data["state"]["board"]["clearings"]["c2"]["warriors"]["marquise"] == 2

    def test_illegal_move_is_400(self, api_client, dominion):
        response = api_client.post("/game/move", json={
            "state": dominion, "faction": "marquise", "from": "c1", "to": "c9", "warriors": 1,
        })

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert data["code"] == "validation_error"
        assert "not adjacent" in data["error"]

    def test_malformed_request_is_422(self, api_client, dominion):
        response = api_client.post("/game/move", json={"state": dominion, "faction": "badgers"})
        assert response.status_code == 422

    def test_battle(self, api_client, dominion):
        response = api_client.post("/game/battle", json={
            "state": dominion, "clearing_id": "c5", "attacker": "eyrie", "defender": "marquise",
        })

        assert response.status_code == 200
        data = response.json()
        assert len(data["dice"]) == 2
        assert "victory_points_earned" in data

    def test_build(self, api_client, dominion):
        response = api_client.post("/game/build", json={
            "state": dominion, "faction": "eyrie", "clearing_id": "c6",
        })

        assert response.status_code == 200
        assert response.json()["building"]["type"] == "roost"

    def test_recruit(self, api_client, dominion):
        response = api_client.post("/game/recruit", json={"state": dominion, "faction": "marquise"})

        assert response.status_code == 200
        assert response.json()["total_placed"] == 1

    def test_token(self, api_client, dominion):
        dominion["factions"]["woodland_alliance"]["supporters"]["bird"] = 3
        response = api_client.post("/game/token", json={
            "state": dominion, "faction": "woodland_alliance", "clearing_id": "c12",
            "token_type": "sympathy",
        })

        assert response.status_code == 200
        assert response.json()["supporters_spent"] == {"bird": 2}

    def test_place_wood(self, api_client, dominion):
        response = api_client.post("/game/place-wood", json={"state": dominion, "clearing_id": "c7"})

        assert response.status_code == 200
        assert response.json()["state"]["factions"]["marquise"]["wood_in_supply"] == 5

    def test_eyrie_phases(self, api_client, dominion):
        birdsong = api_client.post("/game/eyrie/birdsong", json={"state": dominion})
        evening = api_client.post("/game/eyrie/evening", json={"state": dominion})
        turmoil = api_client.post("/game/eyrie/turmoil", json={"state": dominion})

        assert len(birdsong.json()["log"]) == 2
        assert evening.json()["state"]["victory_track"]["eyrie"] == 17
        assert turmoil.json()["lost_points"] == 1

    def test_tagged_action(self, api_client, dominion):
        response = api_client.post("/game/action", json={
            "state": dominion,
            "action": {"type": "recruit", "faction": "eyrie", "clearing_id": "c9", "warriors": 2},
        })

        assert response.status_code == 200
        assert response.json()["total_placed"] == 2

    def test_client_counters_are_recomputed(self, api_client, dominion):
        """Zeroed counters in a request cannot trigger a second New Roost."""
        dominion["factions"]["eyrie"]["roosts_on_map"] = 0
        dominion["factions"]["eyrie"]["roost_track"]["roosts_placed"] = 0

        response = api_client.post("/game/eyrie/birdsong", json={"state": dominion})

        assert response.status_code == 200
        assert response.json()["state"]["factions"]["eyrie"]["roosts_on_map"] == 3

    def test_zero_recruit_rejected(self, api_client, dominion):
        response = api_client.post("/game/recruit", json={
            "state": dominion, "faction": "eyrie", "clearing_id": "c9", "warriors": 0,
        })

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_state_chains_between_calls(self, api_client, dominion):
        """The state returned by one call feeds the next."""
        first = api_client.post("/game/move", json={
            "state": dominion, "faction": "eyrie", "from": "c2", "to": "c3", "warriors": 4,
        }).json()["state"]

        response = api_client.post("/game/move", json={
            "state": first, "faction": "eyrie", "from": "c3", "to": "c4", "warriors": 4,
        })

        assert response.status_code == 200


# -----------------------------------------------------------------------------
# Turn & inspection
# -----------------------------------------------------------------------------

class TestInspection:
    """Tests for turn and inspection endpoints."""

    def test_advance_turn(self, api_client, dominion):
        response = api_client.post("/game/advance-turn", json={"state": dominion})
        assert response.json()["state"]["turn"]["phase"] == "evening"

    def test_summary(self, api_client, dominion):
        response = api_client.post("/game/summary", json={"state": dominion})
        data = response.json()
        assert len(data["clearings"]) == 12
        assert data["marquise"]["warriors_in_supply"] == 14

    def test_invariants(self, api_client):
        state = api_client.post("/scenarios/2").json()["state"]
        response = api_client.post("/game/invariants", json={"state": state})
        assert response.json() == {"ok": True, "violations": []}
