"""Tests for the HTTP surface."""
import pytest
from fastapi.testclient import TestClient
from conftest import SHEET_SECRET, FakeSheet
from scorerelay.main import app
from scorerelay.routes import submit_score
from scorerelay.routes.submit_score import get_http_client, get_relay_config
from scorerelay.settings import RelayConfig


@pytest.fixture()
def api(relay_config):
    """TestClient wired to a FakeSheet; yields (client, sheet)."""
    sheet = FakeSheet()

    async def _client():
        async with sheet.client() as client:
            yield client

    app.dependency_overrides[get_http_client] = _client
    app.dependency_overrides[get_relay_config] = lambda: relay_config
    with TestClient(app) as client:
        yield client, sheet
    app.dependency_overrides.clear()


def test_submit_json(api):
    """Test a JSON submission is relayed and wrapped."""
    client, sheet = api
    
    res = client.post("/api/submitScore", json={"roll": "2023CS10", "snakeScore": 5})
    
    assert res.status_code == 200
    assert res.json() == {"success": True, "sheet": {"status": "ok"}}
    assert b"snakeScore=5" in sheet.requests[0].content


def test_submit_form(api):
    """Test a form submission is accepted like JSON."""
    client, sheet = api
    
    res = client.post("/api/submitScore", data={"roll": "2023CS10", "flappyScore": "8"})
    
    assert res.status_code == 200
    assert b"flappyScore=8" in sheet.requests[0].content


def test_submit_invalid_roll(api):
    """Test validation errors come back as JSON error objects."""
    client, sheet = api
    
    res = client.post("/api/submitScore", json={"roll": "21xx99"})
    
    assert res.status_code == 400
    assert res.json() == {"error": "invalid_roll"}
    assert sheet.requests == []


def test_submit_malformed_json(api):
    """Test an unparseable body is treated as an empty submission."""
    client, _ = api
    
    res = client.post(
        "/api/submitScore",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    
    assert res.status_code == 400
    assert res.json() == {"error": "invalid_roll"}


def test_submit_text_error_relayed(api):
    """Test a raw-text upstream failure is relayed as text with 502."""
    client, sheet = api
    sheet.status_code = 500
    sheet.text = "Internal Error"
    
    res = client.post("/api/submitScore", json={"roll": "2023CS10"})
    
    assert res.status_code == 502
    assert res.text == "Internal Error"
    assert res.headers["content-type"].startswith("text/plain")


def test_leaderboard_query(api):
    """Test GET forwards the query and relays JSON."""
    client, sheet = api
    sheet.text = '{"rows": []}'
    
    res = client.get("/api/submitScore", params={"action": "leaderboard"})
    
    assert res.status_code == 200
    assert res.json() == {"rows": []}
    assert sheet.requests[0].url.params["action"] == "leaderboard"
    assert sheet.requests[0].url.params["secret"] == SHEET_SECRET


def test_put_not_allowed(api):
    """Test PUT reaches the handler and gets a 405 error body."""
    client, sheet = api
    
    res = client.put("/api/submitScore", json={"roll": "2023CS10"})
    
    assert res.status_code == 405
    assert res.json() == {"error": "method_not_allowed"}
    assert sheet.requests == []


def test_not_configured(api):
    """Test missing configuration answers 500 on GET and POST."""
    client, sheet = api
    app.dependency_overrides[get_relay_config] = lambda: RelayConfig()
    
    assert client.get("/api/submitScore").json() == {"error": "server_not_configured"}
    res = client.post("/api/submitScore", json={"roll": "2023CS10"})
    
    assert res.status_code == 500
    assert res.json() == {"error": "server_not_configured"}
    assert sheet.requests == []


def test_secret_never_returned(api):
    """Test the shared secret does not leak into relayed responses."""
    client, _ = api
    
    res = client.post("/api/submitScore", json={"roll": "2023CS10"})
    
    assert SHEET_SECRET not in res.text


def test_list_games(api):
    """Test the game catalog lists all three arcade games."""
    client, _ = api
    
    res = client.get("/api/games")
    
    assert res.status_code == 200
    assert [g["score_field"] for g in res.json()] == ["snakeScore", "flappyScore", "stackScore"]


def test_get_game(api):
    """Test single game lookup and unknown game 404."""
    client, _ = api
    
    assert client.get("/api/games/flappybird").json()["title"] == "Flappy Bird"
    assert client.get("/api/games/pong").status_code == 404


def test_health(api):
    """Test health check."""
    client, _ = api
    
    res = client.get("/health")
    
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_submit_deeply_nested_json(api):
    """Test a deeply nested body is answered with a JSON error object."""
    client, sheet = api
    
    res = client.post(
        "/api/submitScore",
        content=b"[" * 100000,
        headers={"content-type": "application/json"},
    )
    
    assert res.status_code == 400
    assert res.json() == {"error": "invalid_roll"}
    assert sheet.requests == []


def test_body_read_failure_is_server_error(api, monkeypatch):
    """Test a failure while decoding the body becomes 500 server_error."""
    client, sheet = api

    def _explode(raw, content_type=""):
        raise RuntimeError("decoder blew up")

    monkeypatch.setattr(submit_score, "decode_request_fields", _explode)
    
    res = client.post("/api/submitScore", json={"roll": "2023CS10"})
    
    assert res.status_code == 500
    assert res.json() == {"error": "server_error"}
    assert "blew up" not in res.text
    assert sheet.requests == []
