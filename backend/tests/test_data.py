"""API tests for export, import, reload and status."""

import json


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_status_reports_counts_and_no_error(client):
    status = client.get("/api/v1/data/status").json()

    assert (status["products"], status["categories"], status["movements"]) == (5, 4, 0)
    assert status["error"] is None
    assert status["is_loading"] is False


def test_export_is_a_dated_json_attachment(client):
    response = client.get("/api/v1/data/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="inventory_export_')
    assert disposition.endswith('.json"')
    assert set(response.json()) == {"products", "categories", "movements", "exportedAt"}


def test_export_then_import_round_trip(client):
    client.put("/api/v1/products/1/stock", json={"quantity": 3, "reason": "Venta"})
    exported = client.get("/api/v1/data/export").content

    client.delete("/api/v1/products/1")
    client.delete("/api/v1/categories/4")

    response = client.post(
        "/api/v1/data/import",
        files={"file": ("inventory_export.json", exported, "application/json")},
    )

    assert response.status_code == 200
    assert response.json() == {"imported": True, "products": 5, "categories": 4, "movements": 1}
    assert client.get("/api/v1/products/1").json()["stock"] == 3


def test_import_invalid_document_is_rejected(client):
    response = client.post(
        "/api/v1/data/import",
        files={"file": ("broken.json", b'{"products": []}', "application/json")},
    )

    assert response.status_code == 400
    status = client.get("/api/v1/data/status").json()
    assert status["products"] == 5
    assert status["error"]["kind"] == "invalid_import"


def test_reload_rereads_storage_and_clears_error(client):
    client.post(
        "/api/v1/data/import",
        files={"file": ("broken.json", b"nope", "application/json")},
    )

    status = client.post("/api/v1/data/reload").json()

    assert status["error"] is None
    assert status["products"] == 5


def test_import_accepts_empty_inventory(client):
    document = {"products": [], "categories": [], "movements": [], "exportedAt": "2025-01-01T00:00:00Z"}

    response = client.post(
        "/api/v1/data/import",
        files={"file": ("empty.json", json.dumps(document).encode(), "application/json")},
    )

    assert response.status_code == 200
    assert client.get("/api/v1/products").json() == []
    # an imported empty list is data, not a first run: nothing is re-seeded
    assert client.post("/api/v1/data/reload").json()["categories"] == 0
