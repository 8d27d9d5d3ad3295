from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from stockroom.core.db import get_db
from stockroom.main import app
from tests.test_utils import create_delivery, create_stock_unit


@pytest.fixture
def client(db_session):
    def _get_db_override():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_product_crud_and_case_insensitive_sku_conflict(client):
    resp = client.post(
        "/api/v1/product/",
        json={"sku": "SKU-101-BLK", "name": "Classic", "category": "boots", "pairs_per_box": 6},
    )
    assert resp.status_code == 201, resp.text
    product_id = resp.json()["id"]

    resp = client.post("/api/v1/product/", json={"sku": "sku-101-blk", "name": "Duplicate"})
    assert resp.status_code == 409

    resp = client.get(f"/api/v1/product/{product_id}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Classic"

    assert client.delete(f"/api/v1/product/{product_id}").status_code == 204
    assert client.get(f"/api/v1/product/{product_id}").status_code == 404


def test_delivery_total_pairs_defaults_to_boxes_times_pairs(client):
    resp = client.post(
        "/api/v1/delivery/",
        json={"date": "2025-01-10", "sku": "A", "box_count": 10, "pairs_per_box": 6},
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["total_pairs"] == 60

    resp = client.get("/api/v1/delivery/")
    assert [d["sku"] for d in resp.json()] == ["A"]


@pytest.mark.parametrize(
    "payload",
    [
        {"date": "2025-01-10", "sku": "A", "box_count": -1, "pairs_per_box": 6},
        {"date": "2025-02-30", "sku": "A", "box_count": 1, "pairs_per_box": 6},
        {"date": "2025-01-10", "sku": "", "box_count": 1, "pairs_per_box": 6},
    ],
)
def test_delivery_rejects_invalid_input(client, payload):
    resp = client.post("/api/v1/delivery/", json=payload)
    assert resp.status_code == 422


def test_delivery_rejects_total_pairs_that_disagree_with_boxes(client):
    resp = client.post(
        "/api/v1/delivery/",
        json={"date": "2025-01-10", "sku": "A", "box_count": 1, "pairs_per_box": 6, "total_pairs": 600},
    )
    assert resp.status_code == 422

    resp = client.post(
        "/api/v1/delivery/",
        json={"date": "2025-01-10", "sku": "A", "box_count": 1, "pairs_per_box": 6, "total_pairs": 6},
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["total_pairs"] == 6


def test_stock_units_batch_create_and_filter(client):
    resp = client.post(
        "/api/v1/stock-unit/",
        json=[
            {"sku": "A", "size": "40", "color": "Black", "quantity": 10},
            {"sku": "B", "size": "41", "color": "Brown", "quantity": 5},
        ],
    )
    assert resp.status_code == 201, resp.text
    assert len(resp.json()) == 2

    resp = client.get("/api/v1/stock-unit/", params={"sku": "B"})
    assert [u["quantity"] for u in resp.json()] == [5]

    resp = client.post("/api/v1/stock-unit/", json=[{"sku": "A", "size": "40", "color": "Black", "quantity": -3}])
    assert resp.status_code == 422


def test_outgoing_document_create_get_delete(client, db_session):
    create_stock_unit(db_session, sku="X-1", quantity=10, size="40", color="Black")
    create_stock_unit(db_session, sku="X-1", quantity=5, size="41", color="Black")

    resp = client.post(
        "/api/v1/outgoing-document/",
        json={
            "document_number": "AKS-20250110-1234",
            "date": "2025-01-10",
            "time": "09:30",
            "recipient": "Acme",
            "items": [
                {"sku": "X-1", "name": "", "color": "Black", "size": "40", "quantity": 5},
                {"sku": "X-1", "name": "", "color": "Black", "size": "41", "quantity": 3},
            ],
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["total_items"] == 8
    assert len(body["items"]) == 2

    doc_id = body["id"]
    resp = client.get(f"/api/v1/outgoing-document/{doc_id}")
    assert resp.status_code == 200
    assert resp.json()["time"] == "09:30"

    resp = client.get("/api/v1/outgoing-document/", params={"recipient": "Nobody"})
    assert resp.json() == []

    assert client.delete(f"/api/v1/outgoing-document/{doc_id}").status_code == 204
    assert client.get(f"/api/v1/outgoing-document/{doc_id}").status_code == 404


def test_stock_units_cannot_exceed_delivered_pairs(client, db_session):
    create_delivery(db_session, sku="SKU-1", box_count=1, pairs_per_box=6)

    resp = client.post("/api/v1/stock-unit/", json=[{"sku": "SKU-1", "size": "40", "color": "Black", "quantity": 999}])
    assert resp.status_code == 409
    assert "Only 6 pairs available" in resp.json()["detail"]

    resp = client.post(
        "/api/v1/stock-unit/",
        json=[
            {"sku": "SKU-1", "size": "40", "color": "Black", "quantity": 2},
            {"sku": "sku-1", "size": "41", "color": "Black", "quantity": 2},
        ],
    )
    assert resp.status_code == 201, resp.text

    resp = client.post("/api/v1/stock-unit/", json=[{"sku": "SKU-1", "size": "42", "color": "Black", "quantity": 3}])
    assert resp.status_code == 409
    assert "Only 2 pairs available" in resp.json()["detail"]

    assert len(client.get("/api/v1/stock-unit/").json()) == 2


def test_outgoing_document_cannot_exceed_unit_stock(client, db_session):
    create_stock_unit(db_session, sku="X-1", quantity=5, size="40", color="Black")

    def _post(items):
        return client.post(
            "/api/v1/outgoing-document/",
            json={"document_number": "AKS-1", "date": "2025-01-10", "recipient": "Acme", "items": items},
        )

    resp = _post([{"sku": "X-1", "color": "Black", "size": "40", "quantity": 5000}])
    assert resp.status_code == 409
    assert "Insufficient stock" in resp.json()["detail"]

    resp = _post(
        [
            {"sku": "X-1", "color": "Black", "size": "40", "quantity": 3},
            {"sku": "X-1", "color": "black", "size": "40", "quantity": 3},
        ]
    )
    assert resp.status_code == 409

    resp = _post([{"sku": "Y-9", "color": "Black", "size": "40", "quantity": 1}])
    assert resp.status_code == 409

    resp = _post([{"sku": "X-1", "color": "Black", "size": "40", "quantity": 5}])
    assert resp.status_code == 201, resp.text

    resp = _post([{"sku": "X-1", "color": "Black", "size": "40", "quantity": 1}])
    assert resp.status_code == 409
    assert client.get("/api/v1/outgoing-document/").json()[0]["total_items"] == 5
