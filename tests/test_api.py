"""Tests for the HTTP endpoints."""
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from timer_registry.api import create_app
from timer_registry.config import Settings


class TestCreateEndpoint:

    def test_create_echoes_timer(self, client, timer_body):
        response = client.post("/timers", json=timer_body)

        assert response.status_code == 201
        assert response.json() == timer_body

    def test_duplicate(self, client, timer_body):
        client.post("/timers", json=timer_body)
        response = client.post("/timers", json=timer_body)

        assert response.status_code == 400
        assert response.json() == {"detail": "The timer ID must be unique!"}

    def test_malformed_body(self, client):
        response = client.post(
            "/timers", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "Failed to parse request body" in response.json()["detail"]

    def test_wrong_type(self, client, timer_body):
        timer_body["deleteAfter"] = "zero"
        assert client.post("/timers", json=timer_body).status_code == 400

    def test_missing_identifier(self, client, timer_body):
        del timer_body["timerid"]
        response = client.post("/timers", json=timer_body)

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid request parameters!"}

    def test_attribute_names_rejected_as_keys(self, client):
        response = client.post("/timers", json={"timer_id": "py1", "delete_after": 7})

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid request parameters!"}

    def test_null_meta_tags(self, client):
        response = client.post("/timers", json={"timerid": "n1", "metaTags": None})

        assert response.status_code == 201
        assert response.json()["metaTags"] == {}


class TestListEndpoint:

    def test_empty_store(self, client):
        response = client.get("/timers")

        assert response.status_code == 404
        assert response.json() == {"detail": "No timers found"}

    def test_lists_created(self, client, timer_body):
        client.post("/timers", json=timer_body)
        second = dict(timer_body, timerid="t2", deleteAfter=9)
        client.post("/timers", json=second)

        response = client.get("/timers")

        assert response.status_code == 200
        assert response.json() == [timer_body, second]

    def test_storage_failure_keeps_serving(self, client, gateway, timer_body):
        with patch.object(gateway, "find", side_effect=RuntimeError("socket closed")):
            response = client.get("/timers")

        assert response.status_code == 500
        assert "socket closed" not in response.text

        client.post("/timers", json=timer_body)
        assert client.get("/timers").status_code == 200


class TestReplaceEndpoint:

    def test_replace(self, client, timer_body):
        client.post("/timers", json=timer_body)
        replacement = dict(timer_body, expires="2030-01-01T00:00:00Z", metaTags={})

        response = client.put("/timers/t1", json=replacement)

        assert response.status_code == 200
        assert response.json() == replacement
        assert client.get("/timers").json() == [replacement]

    def test_delete_after_mismatch(self, client, timer_body):
        client.post("/timers", json=timer_body)

        response = client.put("/timers/t1", json=dict(timer_body, deleteAfter=5))

        assert response.status_code == 401
        assert client.get("/timers").json() == [timer_body]

    def test_unknown_id(self, client, timer_body):
        response = client.put("/timers/unknown-id", json=dict(timer_body, timerid="unknown-id"))

        assert response.status_code == 404

    def test_malformed(self, client, timer_body):
        client.post("/timers", json=timer_body)

        response = client.put(
            "/timers/t1", content=b"[]", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400


class TestApp:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_lifespan_opens_configured_store(self, tmp_path, timer_body):
        app = create_app(Settings(store_backend="sqlite", sqlite_path=tmp_path / "life.db"))

        with TestClient(app) as c:
            assert c.post("/timers", json=timer_body).status_code == 201
        assert app.state.controller is None

        with TestClient(app) as c:
            assert c.get("/timers").json() == [timer_body]

    def test_startup_fails_without_store(self):
        app = create_app(Settings(store_backend="unknown"))

        with pytest.raises(ValueError):
            with TestClient(app):
                pass
