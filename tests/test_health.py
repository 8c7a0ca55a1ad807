"""Tests for the store liveness probe."""

from sqlalchemy.exc import OperationalError

from queue_server.app import app
from queue_server.deps import get_db


class _UnreachableStore:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def close(self):
        pass


def _unreachable_db():
    yield _UnreachableStore()


def test_health_ok(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_health_reports_store_failure(client):
    app.dependency_overrides[get_db] = _unreachable_db

    resp = client.get("/health")

    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == "error"
    assert "connection refused" in body["message"]
