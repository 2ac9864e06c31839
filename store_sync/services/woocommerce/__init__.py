"""WooCommerce services package."""

from store_sync.services.woocommerce.client import (
    CatalogClient,
    get_catalog_client,
    parse_header_int,
)

from store_sync.services.woocommerce.products import (
    create_item,
    delete_item,
)

from store_sync.services.woocommerce.categories import (
    list_categories,
)

from store_sync.services.woocommerce.converters import (
    catalog_item_create_to_woocommerce,
    catalog_item_to_read,
    product_to_columns,
    remote_to_search_hit,
    variation_to_columns,
)

__all__ = [
    # Client
    'CatalogClient',
    'get_catalog_client',
    'parse_header_int',
    # Products
    'create_item',
    'delete_item',
    # Categories
    'list_categories',
    # Converters
    'catalog_item_create_to_woocommerce',
    'catalog_item_to_read',
    'product_to_columns',
    'remote_to_search_hit',
    'variation_to_columns',
]
