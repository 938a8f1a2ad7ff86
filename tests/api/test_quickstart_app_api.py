"""
Quickstart App API Tests

The documented integration, end to end, against the in-memory credit service.

Usage:
    pytest tests/api/test_quickstart_app_api.py -v
"""
import pytest
from fastapi.testclient import TestClient

from examples import quickstart_app

pytestmark = [pytest.mark.api]


@pytest.fixture
def client(fake_chipp, monkeypatch):
    monkeypatch.setattr(quickstart_app, "chipp_client", fake_chipp)
    return TestClient(quickstart_app.create_app(use_lifespan=False))


class TestQuickstart:

    def test_generate_charges_credits(self, client, fake_chipp):
        fake_chipp.balances["user_1"] = 12

        response = client.post(
            "/api/generate", json={"prompt": "abc"}, headers={"X-User-Id": "user_1"}
        )

        assert response.status_code == 200
        assert response.json() == {"result": "cba", "credits_used": 5, "credits_remaining": 7}

    def test_generate_without_credits_returns_payment_url(self, client, fake_chipp):
        response = client.post(
            "/api/generate", json={"prompt": "abc"}, headers={"X-User-Id": "user_1"}
        )

        assert response.status_code == 402
        body = response.json()
        assert body["error"] == "insufficient_credits"
        assert body["available"] == 0
        assert body["payment_url"] == "https://pay.chipp.test/checkout/user_1"

    def test_generate_requires_identity(self, client):
        response = client.post("/api/generate", json={"prompt": "abc"})
        assert response.status_code == 401

    def test_balance_refresh_route(self, client, fake_chipp):
        fake_chipp.balances["user_1"] = 3
        response = client.get("/api/chipp/user", headers={"X-User-Id": "user_1"})
        assert response.json() == {"userId": "user_1", "credits": 3}

    def test_uninitialized_client(self, monkeypatch):
        monkeypatch.setattr(quickstart_app, "chipp_client", None)
        with pytest.raises(RuntimeError):
            quickstart_app.get_chipp_client()

    def test_invalid_body_is_not_charged(self, client, fake_chipp):
        fake_chipp.balances["user_1"] = 12
        response = client.post("/api/generate", json={"prompt": ""}, headers={"X-User-Id": "user_1"})

        assert response.status_code == 422
        assert fake_chipp.balances["user_1"] == 12


class TestLifespan:

    def test_lifespan_creates_and_closes_client(self, monkeypatch):
        from chipp import config

        monkeypatch.setattr(config, "settings", config.ChippConfig(api_key="k", api_url="https://api.chipp.test"))
        monkeypatch.setattr(quickstart_app, "chipp_client", None)

        with TestClient(quickstart_app.create_app()):
            assert quickstart_app.chipp_client is not None
            assert quickstart_app.chipp_client.base_url == "https://api.chipp.test"

        assert quickstart_app.chipp_client is None
