"""
WooCommerce catalog client tests.

Cover the pagination stop rules, error mapping and request parameters.
"""
import pytest
import requests

from store_sync.core.config import WooCommerceConfig
from store_sync.core.exceptions import (
    WooCommerceAPIError,
    WooCommerceConfigError,
    WooCommerceNotFoundError,
)
from store_sync.services.woocommerce.client import CatalogClient, parse_header_int
from tests.fakes import FakeResponse, make_product, paged


def test_pagination_drains_short_last_page_in_two_requests(client, wcapi):
    """Test: 137 products over per_page=100 take exactly two requests"""
    records = [make_product(i) for i in range(1, 138)]
    wcapi.add("GET", "products", paged(records, with_headers=False))

    products = client.fetch_all_products()

    assert len(products) == 137
    assert [p["id"] for p in products] == list(range(1, 138))
    calls = wcapi.calls_to("GET", "products")
    assert [c[2]["page"] for c in calls] == [1, 2]


def test_pagination_stops_at_total_pages_header(wcapi):
    """Test: a full page that is the last page per X-WP-TotalPages ends the fetch"""
    config = WooCommerceConfig(url="https://shop.test", consumer_key="ck", consumer_secret="cs")
    small_client = CatalogClient(config, wcapi=wcapi, per_page=2)
    wcapi.add("GET", "products", paged([make_product(1), make_product(2)]))

    products = small_client.fetch_all_products()

    assert len(products) == 2
    assert len(wcapi.calls_to("GET", "products")) == 1


def test_pagination_stops_on_empty_page(wcapi):
    config = WooCommerceConfig(url="https://shop.test", consumer_key="ck", consumer_secret="cs")
    small_client = CatalogClient(config, wcapi=wcapi, per_page=2)
    wcapi.add("GET", "products", paged([make_product(1), make_product(2)], with_headers=False))

    products = small_client.fetch_all_products()

    assert len(products) == 2
    assert len(wcapi.calls_to("GET", "products")) == 2


def test_failing_page_aborts_whole_fetch(wcapi):
    """Test: a non-success page discards the pages already fetched"""
    config = WooCommerceConfig(url="https://shop.test", consumer_key="ck", consumer_secret="cs")
    small_client = CatalogClient(config, wcapi=wcapi, per_page=2)

    def handler(params, data):
        if params["page"] == 1:
            return FakeResponse(200, [make_product(1), make_product(2)])
        return FakeResponse(500, {"message": "boom"})

    wcapi.add("GET", "products", handler)

    with pytest.raises(WooCommerceAPIError) as exc_info:
        small_client.fetch_all_products()

    assert exc_info.value.status_code == 500
    assert exc_info.value.page == 2


def test_full_fetch_requests_every_status(client, wcapi):
    wcapi.add("GET", "products", FakeResponse(200, []))

    assert client.fetch_all_products() == []

    params = wcapi.calls_to("GET", "products")[0][2]
    assert params["status"] == "any"
    assert params["per_page"] == 100


def test_transport_error_is_wrapped(client, wcapi):
    wcapi.add("GET", "products", requests.Timeout("read timed out"))

    with pytest.raises(WooCommerceAPIError) as exc_info:
        client.fetch_all_products()

    assert exc_info.value.page == 1


def test_invalid_json_is_an_api_error(client, wcapi):
    wcapi.add("GET", "products/5", FakeResponse(200, ValueError("Expecting value")))

    with pytest.raises(WooCommerceAPIError):
        client.fetch_product(5)


def test_targeted_404_raises_not_found(client, wcapi):
    """Test: a missing product is told apart from other failures"""
    with pytest.raises(WooCommerceNotFoundError) as exc_info:
        client.fetch_product(404404)

    assert isinstance(exc_info.value, WooCommerceAPIError)
    assert exc_info.value.status_code == 404


def test_fetch_variation_uses_nested_path(client, wcapi):
    wcapi.add("GET", "products/10/variations/11", FakeResponse(200, {"id": 11}))

    assert client.fetch_variation(10, 11) == {"id": 11}


def test_delete_forces_removal(client, wcapi):
    wcapi.add("DELETE", "products/7", FakeResponse(200, {"id": 7}))
    wcapi.add("DELETE", "products/7/variations/8", FakeResponse(200, {"id": 8}))

    client.delete_product(7)
    client.delete_variation(7, 8)

    assert wcapi.calls_to("DELETE", "products/7")[0][2] == {"force": "true"}
    assert wcapi.calls_to("DELETE", "products/7/variations/8")[0][2] == {"force": "true"}


def test_search_reads_totals_from_headers(client, wcapi):
    wcapi.add("GET", "products", FakeResponse(
        200, [make_product(1)], {"X-WP-Total": "41", "X-WP-TotalPages": "3"}
    ))

    records, total_items, total_pages = client.search({"search": "x", "page": 1})

    assert [r["id"] for r in records] == [1]
    assert (total_items, total_pages) == (41, 3)


@pytest.mark.parametrize("headers, expected", [
    ({"X-WP-TotalPages": "4"}, 4),
    ({"X-WP-TotalPages": "abc"}, 0),
    ({"X-WP-TotalPages": ""}, 0),
    ({}, 0),
    (None, 0),
])
def test_parse_header_int_is_defensive(headers, expected):
    assert parse_header_int(headers, "X-WP-TotalPages") == expected


def test_missing_credentials_raise_config_error(wcapi):
    config = WooCommerceConfig(url="https://shop.test", consumer_key="", consumer_secret=" ")

    with pytest.raises(WooCommerceConfigError) as exc_info:
        CatalogClient(config, wcapi=wcapi)

    assert "consumer_key" in str(exc_info.value)
    assert "consumer_secret" in str(exc_info.value)
    assert wcapi.calls == []
