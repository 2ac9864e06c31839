"""Relevance-ranked product search against the WooCommerce catalog."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from store_sync.constants.woocommerce import DEFAULT_PER_PAGE, WCProductStatus
from store_sync.core.exceptions import WooCommerceError
from store_sync.models.product_models import SearchHit, SearchResult
from store_sync.services.woocommerce.client import CatalogClient
from store_sync.services.woocommerce.converters import remote_to_search_hit

logger = logging.getLogger(__name__)


def relevance_key(hit: SearchHit, query: str) -> Tuple[bool, bool, bool, str]:
    """
    Sort key for a search hit; False sorts first.

    Precedence: SKU starts with the query, name starts with the query,
    name contains the query, then name order. All comparisons ignore case.
    """
    q = query.lower()
    name = (hit.name or "").lower()
    sku = (hit.sku or "").lower()
    return (
        not sku.startswith(q),
        not name.startswith(q),
        q not in name,
        name,
    )


def rank_hits(hits: List[SearchHit], query: str) -> List[SearchHit]:
    return sorted(hits, key=lambda hit: relevance_key(hit, query.strip()))


def merge_sku_hits(text_records: List[Dict[str, Any]], sku_records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Prepend SKU matches that the full-text search did not return."""
    text_ids = {record.get("id") for record in text_records}
    unique_sku = [record for record in sku_records if record.get("id") not in text_ids]
    return unique_sku + text_records


def _search_params(query: str, page: int, by_sku: bool) -> Dict[str, Any]:
    params = {
        "per_page": DEFAULT_PER_PAGE,
        "page": 1 if by_sku else page,
        "status": WCProductStatus.PUBLISH,
    }
    params["sku" if by_sku else "search"] = query
    return params


async def search_products(
    query: str,
    page: int = 1,
    client: Optional[CatalogClient] = None,
) -> SearchResult:
    """
    Search the remote catalog by text, and on page 1 by SKU as well.

    Search is best effort: any failure of the text search, including
    missing credentials, returns an empty result. Totals come from the text
    search only.

    Args:
        query: Free text typed by the user
        page: Result page of the text search
        client: WooCommerce catalog client (built from settings if None)

    Returns:
        SearchResult with ranked hits and pagination totals
    """
    if not query or not query.strip():
        return SearchResult()

    query = query.strip()
    try:
        client = client or CatalogClient.from_settings()
    except WooCommerceError as e:
        logger.error(f"Search unavailable: {e}")
        return SearchResult()

    requests_ = [asyncio.to_thread(client.search, _search_params(query, page, by_sku=False))]
    if page == 1:
        requests_.append(asyncio.to_thread(client.search, _search_params(query, page, by_sku=True)))

    logger.info(f"Searching WooCommerce for {query!r} (page {page})")
    responses = await asyncio.gather(*requests_, return_exceptions=True)

    text_response = responses[0]
    if isinstance(text_response, BaseException):
        logger.error(f"Search error: {text_response}")
        return SearchResult()
    text_records, total_items, total_pages = text_response

    records = text_records
    if len(responses) > 1:
        sku_response = responses[1]
        if isinstance(sku_response, BaseException):
            logger.warning(f"SKU search failed, using text results only: {sku_response}")
        else:
            records = merge_sku_hits(text_records, sku_response[0])

    hits = []
    for raw in records:
        try:
            hits.append(remote_to_search_hit(raw))
        except ValueError as e:
            logger.warning(f"Skipping malformed search record {raw.get('id')}: {e}")

    return SearchResult(
        products=rank_hits(hits, query),
        total_items=total_items,
        total_pages=total_pages,
    )


def list_variations(product_id: int, client: Optional[CatalogClient] = None) -> List[SearchHit]:
    """
    List a variable product's variations in search hit form.

    Failures are logged and yield an empty list.
    """
    try:
        client = client or CatalogClient.from_settings()
        variations = client.fetch_variations(product_id)
    except WooCommerceError as e:
        logger.error(f"Error fetching variations for product {product_id}: {e}")
        return []

    hits = []
    for raw in variations:
        try:
            hits.append(remote_to_search_hit(raw, parent_id=product_id))
        except ValueError as e:
            logger.warning(f"Skipping malformed variation {raw.get('id')} of {product_id}: {e}")
    return hits
