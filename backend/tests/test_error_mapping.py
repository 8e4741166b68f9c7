from __future__ import annotations

from fastapi.testclient import TestClient

from user_crud.services import users as users_service
from user_crud.services.errors import DatabaseUnavailable


def test_unexpected_failure_returns_generic_500(app, monkeypatch):
    def _boom(db, payload):
        raise RuntimeError("password=hunter2 leaked from driver")

    monkeypatch.setattr(users_service, "create_user", _boom)

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.post("/users", json={"name": "Alice", "email": "alice@example.com"})

    assert r.status_code == 500
    assert "hunter2" not in r.text
    body = r.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert body["error"]["message"] == "Internal Server Error"


def test_database_unavailable_maps_to_500(client, monkeypatch):
    def _unavailable(db, user_id):
        raise DatabaseUnavailable("pool timed out after 30s on 10.0.0.5")

    monkeypatch.setattr(users_service, "get_user", _unavailable)

    r = client.get("/users/1", headers={"X-Request-Id": "req-123"})
    assert r.status_code == 500
    assert "10.0.0.5" not in r.text
    body = r.json()
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert body["meta"]["request_id"] == "req-123"


def test_unreachable_database_on_write_maps_to_500(app, client, broken_session_factory):
    from user_crud.db.session import get_db

    def _broken_db():
        session = broken_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _broken_db

    r = client.post("/users", json={"name": "Alice", "email": "alice@example.com"})
    assert r.status_code == 500
    assert r.json()["error"]["code"] == "INTERNAL_ERROR"

    r = client.delete("/users/1")
    assert r.status_code == 500


def test_validation_errors_are_400_not_422(client):
    r = client.put("/users/1", json={"age": -3})
    assert r.status_code == 400
    errors = r.json()["error"]["details"]["errors"]
    assert errors and errors[0]["loc"] == ["body", "age"]
