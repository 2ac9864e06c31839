"""Payload normalization and conversion tests."""
from decimal import Decimal
import json

import pytest

from store_sync.models.product_models import CatalogItemCreate, RemoteProduct, RemoteVariation
from store_sync.services.woocommerce.converters import (
    catalog_item_create_to_woocommerce,
    product_to_columns,
    remote_to_search_hit,
    variation_to_columns,
)
from store_sync.utils.payload_helpers import decode_blob, find_meta_value, parse_decimal
from tests.fakes import make_product


@pytest.mark.parametrize("raw, expected", [
    ("12.50", Decimal("12.50")),
    ("0", Decimal("0")),
    (7, Decimal("7")),
    ("", Decimal("0")),
    (None, Decimal("0")),
    ("abc", Decimal("0")),
    ("NaN", Decimal("0")),
    ("Infinity", Decimal("0")),
    ("12.5 USD", Decimal("12.5")),
    ("  7kg", Decimal("7")),
    ("-3.25e1x", Decimal("-32.5")),
    (".5", Decimal("0.5")),
    ("USD 12", Decimal("0")),
    (True, Decimal("0")),
])
def test_parse_decimal(raw, expected):
    assert parse_decimal(raw) == expected


def test_unparseable_prices_become_zero():
    """Test: invalid remote prices are stored as 0"""
    product = RemoteProduct.model_validate(
        make_product(1, price="abc", regular_price="", sale_price=None, weight="heavy")
    )

    assert product.price == Decimal("0")
    assert product.regular_price == Decimal("0")
    assert product.sale_price == Decimal("0")
    assert product.weight == Decimal("0")


def test_missing_stock_and_lists_default():
    product = RemoteProduct.model_validate({"id": 3, "name": None, "stock_quantity": None, "images": None})

    assert product.name == ""
    assert product.stock_quantity == 0
    assert product.images == []


def test_barcode_first_matching_meta_entry_wins():
    meta = [
        {"key": "_other", "value": "x"},
        {"key": "_barcode", "value": "111"},
        {"key": "backup_gudang", "value": "222"},
    ]

    assert find_meta_value(meta) == "111"
    assert find_meta_value([{"key": "barcode", "value": 899}]) == "899"
    assert find_meta_value([{"key": "_sku_alt", "value": "x"}]) is None
    assert find_meta_value(None) is None


@pytest.mark.parametrize("raw", [None, "", "not json", '{"id": 1}', "42"])
def test_decode_blob_degrades_to_empty(raw):
    assert decode_blob(raw, "images", 1) == []


def test_product_columns():
    columns = product_to_columns(RemoteProduct.model_validate(make_product(
        5, meta_data=[{"key": "_pos_barcode", "value": "ABC"}]
    )))

    assert columns["remote_id"] == 5
    assert columns["parent_remote_id"] is None
    assert columns["barcode"] == "ABC"
    assert columns["is_missing_from_woo"] is False
    assert json.loads(columns["categories"]) == [{"id": 3, "name": "Tools", "slug": "tools"}]
    assert "purchased" not in columns
    assert "store_name" not in columns


def test_variation_columns_take_parent_name_and_single_image():
    variation = RemoteVariation.model_validate({
        "id": 11,
        "name": "Red",
        "price": "9",
        "image": {"id": 2, "src": "https://shop.test/red.jpg"},
        "attributes": [{"name": "Color", "option": "Red"}],
    })

    columns = variation_to_columns(variation, 10, "Shirt")

    assert columns["kind"] == "variation"
    assert columns["parent_remote_id"] == 10
    assert columns["name"] == "Shirt"
    assert json.loads(columns["images"]) == [{"id": 2, "src": "https://shop.test/red.jpg"}]
    assert json.loads(columns["categories"]) == []


def test_variation_name_fallback():
    variation = RemoteVariation.model_validate({"id": 7, "name": "", "image": {}})

    columns = variation_to_columns(variation, 10)

    assert columns["name"] == "Variation #7"
    assert json.loads(columns["images"]) == []


def test_search_hit_for_variation():
    hit = remote_to_search_hit({
        "id": 11,
        "sku": "SH-R",
        "price": "",
        "image": {"src": "https://shop.test/red.jpg"},
    }, parent_id=10)

    assert hit.type == "variation"
    assert hit.parent_id == 10
    assert hit.name == "Variation #11"
    assert hit.price == Decimal("0")
    assert hit.image == "https://shop.test/red.jpg"


def test_create_payload_forwards_image_urls():
    item = CatalogItemCreate(
        name="Hammer",
        regular_price="25.00",
        image_urls=["https://cdn.test/a.jpg", "https://cdn.test/b.jpg"],
    )

    data = catalog_item_create_to_woocommerce(item)

    assert data["images"] == [{"src": "https://cdn.test/a.jpg"}, {"src": "https://cdn.test/b.jpg"}]
    assert "image_urls" not in data
    assert "sku" not in data
    assert data["regular_price"] == "25.00"
