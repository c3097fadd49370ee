"""API tests for /api/items."""
import uuid
import pytest


@pytest.fixture
def shelves(client):
    for body in (
        {"id": "warehouse", "name": "Warehouse"},
        {"id": "shelf-1", "name": "Shelf 1", "parent_location_id": "warehouse"},
        {"id": "shelf-2", "name": "Shelf 2", "parent_location_id": "warehouse"},
    ):
        assert client.post("/api/locations", json=body).status_code == 201


def _create(client, name, location_id="shelf-1", **extra):
    resp = client.post("/api/items", json={"name": name, "location_id": location_id, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_item(client, shelves):
    data = _create(client, "Drill", description="Cordless", properties={"voltage": "18V"})
    assert uuid.UUID(data["id"])
    assert data["location_id"] == "shelf-1"
    assert data["properties"] == {"voltage": "18V"}


def test_create_item_in_non_leaf(client, shelves):
    resp = client.post("/api/items", json={"name": "Hammer", "location_id": "warehouse"})
    assert resp.status_code == 400
    assert "child locations" in resp.json()["detail"]


def test_create_item_unknown_location(client):
    resp = client.post("/api/items", json={"name": "Hammer", "location_id": "ghost"})
    assert resp.status_code == 404


def test_get_item(client, shelves):
    item = _create(client, "Drill")
    resp = client.get(f"/api/items/{item['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Drill"


def test_get_item_not_found(client):
    assert client.get(f"/api/items/{uuid.uuid4()}").status_code == 404


def test_update_item(client, shelves):
    item = _create(client, "Drill")
    resp = client.put(f"/api/items/{item['id']}", json={"name": "Impact drill", "properties": {"brand": "Makita"}})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Impact drill"
    assert resp.json()["location_id"] == "shelf-1"


def test_delete_item(client, shelves):
    item = _create(client, "Drill")
    assert client.delete(f"/api/items/{item['id']}").status_code == 204
    assert client.get(f"/api/items/{item['id']}").status_code == 404


def test_list_items(client, shelves):
    _create(client, "Saw")
    _create(client, "Axe")
    assert [i["name"] for i in client.get("/api/items").json()] == ["Axe", "Saw"]


def test_move_items(client, shelves):
    a = _create(client, "Saw")
    b = _create(client, "Axe")
    resp = client.post("/api/items/move", json={"item_ids": [a["id"], b["id"]], "new_location_id": "shelf-2"})
    assert resp.status_code == 200
    assert resp.json() == {"moved": 2}
    assert len(client.get("/api/locations/shelf-2/items").json()) == 2


def test_move_items_empty_batch(client, shelves):
    resp = client.post("/api/items/move", json={"item_ids": [], "new_location_id": "shelf-2"})
    assert resp.status_code == 400


def test_move_items_unknown_id(client, shelves):
    a = _create(client, "Saw")
    resp = client.post(
        "/api/items/move",
        json={"item_ids": [a["id"], str(uuid.uuid4())], "new_location_id": "shelf-2"},
    )
    assert resp.status_code == 404
    assert client.get(f"/api/items/{a['id']}").json()["location_id"] == "shelf-1"


def test_search_items(client, shelves):
    _create(client, "Red Wrench")
    _create(client, "Blue Hammer")
    _create(client, "Red Hammer", "shelf-2")
    body = client.get("/api/items/search", params={"q": "Red Hammer"}).json()
    assert body["total_count"] == 3
    assert body["results"][0]["name"] == "Red Hammer"
    assert body["has_more"] is False


def test_search_items_blank_term(client, shelves):
    for name in ("Saw", "Axe", "Tape"):
        _create(client, name)
    body = client.get("/api/items/search", params={"offset": 1, "limit": 1}).json()
    assert [r["name"] for r in body["results"]] == ["Saw"]
    assert body["total_count"] == 3
    assert body["has_more"] is True


def test_search_items_negative_offset(client):
    resp = client.get("/api/items/search", params={"q": "saw", "offset": -1})
    assert resp.status_code == 400
