import os
import tempfile

# Settings and the engine are built at import time, so point them at a scratch
# database before anything from queue_server is imported.
_tmpdir = tempfile.mkdtemp(prefix="arcade-queue-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["API_PREFIX"] = ""
os.environ["SQLITE_TIMEOUT"] = "0.2"

import pytest
from fastapi.testclient import TestClient

from queue_server.app import app
from queue_server.database import Base, SessionLocal, engine


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_cabinet(client):
    def _make(name="Pac-Man"):
        resp = client.post("/cabinets", json={"name": name})
        assert resp.status_code == 201
        return resp.json()
    return _make


@pytest.fixture
def add_entry(client):
    def _add(cabinet_id, *players, entry_type=None):
        entry_type = entry_type or ("solo" if len(players) == 1 else "duo")
        resp = client.post(
            "/queue",
            json={"cabinet_id": cabinet_id, "type": entry_type, "players": list(players)},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _add


@pytest.fixture
def queue_of(client):
    """Position-sorted queue items of one cabinet, as served by GET /cabinets."""
    def _queue(cabinet_id):
        for cab in client.get("/cabinets").json():
            if cab["id"] == cabinet_id:
                return cab["queue_items"]
        return None
    return _queue
