"""WooCommerce category listing."""

import logging
from typing import Any, Dict, List, Optional

from store_sync.core.exceptions import WooCommerceError
from store_sync.services.woocommerce.client import CatalogClient

__logger__ = logging.getLogger(__name__)


def list_categories(client: Optional[CatalogClient] = None) -> List[Dict[str, Any]]:
    """
    Fetch every product category as id/name/slug/parent/count records.

    Returns an empty list when WooCommerce cannot be reached.
    """
    try:
        client = client or CatalogClient.from_settings()
        categories = client.fetch_categories()
    except WooCommerceError as e:
        __logger__.error(f"Error fetching categories: {e}")
        return []

    return [
        {
            "id": category.get("id"),
            "name": category.get("name", ""),
            "slug": category.get("slug"),
            "parent": category.get("parent") or None,
            "count": category.get("count", 0),
        }
        for category in categories
    ]
