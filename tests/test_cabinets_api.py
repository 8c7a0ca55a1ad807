"""Tests for the cabinet endpoints."""


class TestCabinetCrud:

    def test_create_cabinet_returns_201(self, client):
        resp = client.post("/cabinets", json={"name": "  Galaga  "})
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Galaga"
        assert isinstance(data["id"], int)

    def test_blank_name_rejected(self, client):
        resp = client.post("/cabinets", json={"name": "   "})
        assert resp.status_code == 422

    def test_missing_name_rejected(self, client):
        resp = client.post("/cabinets", json={})
        assert resp.status_code == 422

    def test_list_includes_empty_queue(self, client, make_cabinet):
        cab = make_cabinet("Tekken")
        data = client.get("/cabinets").json()
        assert data == [
            {
                "id": cab["id"],
                "name": "Tekken",
                "created_at": cab["created_at"],
                "updated_at": data[0]["updated_at"],
                "queue_items": [],
            }
        ]

    def test_rename(self, client, make_cabinet):
        cab = make_cabinet("Tekken")
        resp = client.put(f"/cabinets/{cab['id']}", json={"name": "Tekken 3"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Tekken 3"
        assert client.get("/cabinets").json()[0]["name"] == "Tekken 3"

    def test_rename_missing_is_404(self, client):
        resp = client.put("/cabinets/999", json={"name": "Nope"})
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Cabinet not found"


class TestCabinetDelete:

    def test_delete_cascades_queue_entries(self, client, make_cabinet, add_entry):
        doomed = make_cabinet("Pac-Man")
        kept = make_cabinet("Galaga")
        add_entry(doomed["id"], "Alice")
        add_entry(doomed["id"], "Bob", "Cara")
        survivor = add_entry(kept["id"], "Dan")

        resp = client.delete(f"/cabinets/{doomed['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "message": "Deleted", "cleared": 2}

        queue = client.get("/queue").json()
        assert [item["id"] for item in queue] == [survivor["id"]]
        assert all(item["cabinet_id"] != doomed["id"] for item in queue)
        assert [c["id"] for c in client.get("/cabinets").json()] == [kept["id"]]

    def test_delete_missing_is_lenient(self, client):
        resp = client.delete("/cabinets/424242")
        assert resp.status_code == 200
        assert resp.json()["ok"] is False

    def test_delete_twice(self, client, make_cabinet):
        cab = make_cabinet()
        assert client.delete(f"/cabinets/{cab['id']}").json()["ok"] is True
        assert client.delete(f"/cabinets/{cab['id']}").json()["ok"] is False
