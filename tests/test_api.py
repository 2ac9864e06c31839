"""Catalog HTTP API tests."""
import pytest
from fastapi.testclient import TestClient

from store_sync.api.v1.endpoints.catalog import catalog_client
from store_sync.core.config import settings
from store_sync.db.session import get_db
from store_sync.main import app
from store_sync.models.catalog_item import CatalogItem
from tests.fakes import FakeResponse, make_product, paged


@pytest.fixture
def api(db, client):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[catalog_client] = lambda: client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_sync_then_list(api, wcapi):
    wcapi.add("GET", "products", paged([make_product(1), make_product(2, stock_quantity=0)]))

    response = api.post("/catalog/sync")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["synced"] == 2

    response = api.get("/catalog/items/low-stock")
    assert response.status_code == 200
    assert [i["remote_id"] for i in response.json()] == [2, 1]


def test_single_sync_not_found(api):
    response = api.post("/catalog/sync/5", params={"parent_id": 4})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "not_found"
    assert body["parent_remote_id"] == 4


def test_purchase_flow(api, db):
    db.add(CatalogItem(remote_id=1, name="Nails", kind="simple"))
    db.commit()

    response = api.post("/catalog/items/1/purchased", json={
        "purchased": True,
        "purchase_data": {"purchase_qty": 3, "purchase_currency": "IDR"},
    })
    assert response.json()["success"] is True

    purchased = api.get("/catalog/items/purchased").json()
    assert [i["remote_id"] for i in purchased] == [1]
    assert purchased[0]["purchase_qty"] == 3

    response = api.put("/catalog/items/1/store-name", json={"store_name": "Toko A"})
    assert response.json()["stale_views"] == ["all_products", "low_stock"]


def test_mutation_on_unknown_item_is_not_an_http_error(api):
    response = api.put("/catalog/items/9/keterangan", json={"keterangan": "x"})

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "remote_id": 9,
        "stale_views": [],
        "error": "Product 9 not found",
    }


def test_search(api, wcapi):
    wcapi.add("GET", "products", FakeResponse(200, [make_product(3, name="abc tool")]))

    response = api.get("/catalog/search", params={"q": "abc"})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()["products"]] == [3]


def test_missing_credentials_make_remote_routes_unavailable(db, monkeypatch):
    monkeypatch.setattr(settings, "wc_base_url", "")
    app.dependency_overrides[get_db] = lambda: db
    try:
        api = TestClient(app)
        assert api.post("/catalog/sync").status_code == 503
        assert api.get("/catalog/categories").status_code == 503
        assert api.get("/catalog/items").status_code == 200
    finally:
        app.dependency_overrides.clear()
