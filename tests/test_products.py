"""Remote catalog maintenance tests (create, delete, categories)."""
from store_sync.constants.sync import StaleView
from store_sync.models.catalog_item import CatalogItem
from store_sync.models.product_models import CatalogItemCreate
from store_sync.repositories import CatalogItemRepository
from store_sync.services.woocommerce import create_item, delete_item, list_categories
from tests.fakes import FakeResponse, make_product


def test_create_item_posts_then_mirrors(db, client, wcapi, stale_views):
    wcapi.add("POST", "products", lambda params, data: FakeResponse(201, make_product(
        77, name=data["name"], images=data["images"]
    )))

    result = create_item(
        db,
        CatalogItemCreate(name="Hammer", regular_price="25.00", image_urls=["https://cdn.test/h.jpg"]),
        client=client,
    )

    assert result.success is True
    assert result.remote_id == 77
    posted = wcapi.calls_to("POST", "products")[0][3]
    assert posted["images"] == [{"src": "https://cdn.test/h.jpg"}]
    item = CatalogItemRepository(db).get_by_remote_id(77)
    assert item.name == "Hammer"
    assert stale_views == [list(StaleView.ALL)]


def test_create_item_remote_failure(db, client, wcapi):
    wcapi.add("POST", "products", FakeResponse(400, {"message": "Invalid SKU"}))

    result = create_item(db, CatalogItemCreate(name="Hammer"), client=client)

    assert result.success is False
    assert "400" in result.error
    assert db.query(CatalogItem).count() == 0


def test_delete_product(db, client, wcapi):
    db.add(CatalogItem(remote_id=5, name="Old", kind="simple"))
    db.commit()
    wcapi.add("DELETE", "products/5", FakeResponse(200, {"id": 5}))

    result = delete_item(db, 5, client=client)

    assert result.success is True
    assert CatalogItemRepository(db).get_by_remote_id(5) is None


def test_delete_variation_uses_variation_path(db, client, wcapi):
    db.add(CatalogItem(remote_id=11, parent_remote_id=10, name="Shirt", kind="variation"))
    db.commit()
    wcapi.add("DELETE", "products/10/variations/11", FakeResponse(200, {"id": 11}))

    result = delete_item(db, 11, client=client)

    assert result.success is True
    assert wcapi.calls_to("DELETE", "products/11") == []


def test_delete_already_gone_remotely(db, client, wcapi):
    """Test: a remote 404 still removes the local row"""
    db.add(CatalogItem(remote_id=5, name="Old", kind="simple"))
    db.commit()

    result = delete_item(db, 5, client=client)

    assert result.success is True
    assert CatalogItemRepository(db).get_by_remote_id(5) is None


def test_delete_remote_failure_keeps_row(db, client, wcapi):
    db.add(CatalogItem(remote_id=5, name="Old", kind="simple"))
    db.commit()
    wcapi.add("DELETE", "products/5", FakeResponse(500, {"message": "boom"}))

    result = delete_item(db, 5, client=client)

    assert result.success is False
    assert CatalogItemRepository(db).get_by_remote_id(5) is not None


def test_delete_unknown_item(db, client, wcapi):
    result = delete_item(db, 5, client=client)

    assert result.success is False
    assert wcapi.calls == []


def test_list_categories(client, wcapi):
    wcapi.add("GET", "products/categories", FakeResponse(200, [
        {"id": 3, "name": "Tools", "slug": "tools", "parent": 0, "count": 12},
        {"id": 4, "name": "Hammers", "slug": "hammers", "parent": 3, "count": 2},
    ]))

    categories = list_categories(client=client)

    assert categories == [
        {"id": 3, "name": "Tools", "slug": "tools", "parent": None, "count": 12},
        {"id": 4, "name": "Hammers", "slug": "hammers", "parent": 3, "count": 2},
    ]
