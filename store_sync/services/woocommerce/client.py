"""WooCommerce API client utilities."""

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from woocommerce import API

from store_sync.constants.woocommerce import (
    DEFAULT_PER_PAGE,
    WCEndpoint,
    WCHeader,
    WCProductStatus,
)
from store_sync.core.config import WooCommerceConfig, settings
from store_sync.core.exceptions import (
    WooCommerceAPIError,
    WooCommerceNotFoundError,
)
from store_sync.factories.woocommerce_factory import WooCommerceClientFactory

__logger__ = logging.getLogger(__name__)


def parse_header_int(headers: Any, name: str) -> int:
    """Read an integer pagination header, 0 when absent or unparseable."""
    if headers is None:
        return 0
    try:
        return int(headers.get(name) or 0)
    except (TypeError, ValueError):
        return 0


class CatalogClient:
    """
    Read/write access to a store's WooCommerce catalog.

    Credentials are validated once here; a client that was constructed can
    always reach the network.
    """

    def __init__(
        self,
        config: WooCommerceConfig,
        wcapi: Optional[API] = None,
        per_page: int = DEFAULT_PER_PAGE,
    ):
        self.config = config.validate_credentials()
        self.wcapi = wcapi or WooCommerceClientFactory.from_config(self.config)
        self.per_page = per_page

    @classmethod
    def from_settings(cls, wcapi: Optional[API] = None) -> "CatalogClient":
        """
        Build a client from environment settings.

        Raises:
            WooCommerceConfigError: If credentials are not configured
        """
        return cls(settings.woocommerce_config(), wcapi=wcapi, per_page=settings.wc_per_page)

    # ------------------------------------------------------------------
    # Low level requests
    # ------------------------------------------------------------------

    def _send(self, method: str, path: str, page: Optional[int] = None, **kwargs) -> requests.Response:
        try:
            if method == "GET":
                r = self.wcapi.get(path, **kwargs)
            elif method == "POST":
                r = self.wcapi.post(path, kwargs.pop("data", {}), **kwargs)
            elif method == "DELETE":
                r = self.wcapi.delete(path, **kwargs)
            else:
                raise ValueError(f"Unsupported method {method}")
        except requests.RequestException as e:
            __logger__.error(f"WooCommerce {method} transport error on {path} (page {page}): {e}")
            raise WooCommerceAPIError(
                f"WooCommerce {method} {path} failed: {e}", page=page
            ) from e

        if r.status_code == 404:
            raise WooCommerceNotFoundError(f"WooCommerce resource not found: {path}", page=page)
        if not r.ok:
            __logger__.error(f"WooCommerce {method} error on {path}: {r.status_code} - {r.text}")
            where = f" (page {page})" if page is not None else ""
            raise WooCommerceAPIError(
                f"WooCommerce API error ({r.status_code}) on {path}{where}: {r.text}",
                status_code=r.status_code,
                page=page,
            )
        return r

    @staticmethod
    def _json(r: requests.Response, path: str, page: Optional[int] = None) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise WooCommerceAPIError(
                f"WooCommerce returned invalid JSON on {path}", status_code=r.status_code, page=page
            ) from e

    def _fetch_all(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Drain a paginated collection endpoint.

        Stops on an empty page, when the X-WP-TotalPages header says the
        last page was reached, or when a page is shorter than per_page.
        Any failing page aborts the whole fetch.
        """
        records: List[Dict[str, Any]] = []
        page = 1
        while True:
            query = dict(params or {})
            query.update({"page": page, "per_page": self.per_page})
            __logger__.debug(f"Fetching {path} page {page}")

            r = self._send("GET", path, page=page, params=query)
            batch = self._json(r, path, page)
            if not isinstance(batch, list) or not batch:
                break

            records.extend(batch)

            total_pages = parse_header_int(r.headers, WCHeader.TOTAL_PAGES)
            if total_pages and page >= total_pages:
                break
            if len(batch) < self.per_page:
                break
            page += 1

        __logger__.info(f"Fetched {len(records)} records from {path} in {page} page(s)")
        return records

    # ------------------------------------------------------------------
    # Catalog reads
    # ------------------------------------------------------------------

    def fetch_all_products(self) -> List[Dict[str, Any]]:
        """Fetch every product regardless of publication status."""
        return self._fetch_all(WCEndpoint.PRODUCTS, {"status": WCProductStatus.ANY})

    def fetch_variations(self, product_id: int) -> List[Dict[str, Any]]:
        """Fetch every variation of a variable product."""
        return self._fetch_all(WCEndpoint.variations(product_id))

    def fetch_categories(self) -> List[Dict[str, Any]]:
        return self._fetch_all(WCEndpoint.CATEGORIES)

    def fetch_product(self, product_id: int) -> Dict[str, Any]:
        """
        Fetch one product by ID.

        Raises:
            WooCommerceNotFoundError: On HTTP 404
            WooCommerceAPIError: On any other failure
        """
        path = WCEndpoint.product(product_id)
        return self._json(self._send("GET", path), path)

    def fetch_variation(self, product_id: int, variation_id: int) -> Dict[str, Any]:
        """
        Fetch one variation of a variable product.

        Raises:
            WooCommerceNotFoundError: On HTTP 404
            WooCommerceAPIError: On any other failure
        """
        path = WCEndpoint.variation(product_id, variation_id)
        return self._json(self._send("GET", path), path)

    def search(self, params: Dict[str, Any]) -> Tuple[List[Dict[str, Any]], int, int]:
        """
        Run one page of a product query.

        Returns:
            (records, total_items, total_pages) with totals taken from the
            X-WP-Total and X-WP-TotalPages headers
        """
        path = WCEndpoint.PRODUCTS
        r = self._send("GET", path, page=params.get("page"), params=params)
        records = self._json(r, path, params.get("page"))
        if not isinstance(records, list):
            records = []
        return (
            records,
            parse_header_int(r.headers, WCHeader.TOTAL),
            parse_header_int(r.headers, WCHeader.TOTAL_PAGES),
        )

    # ------------------------------------------------------------------
    # Catalog writes
    # ------------------------------------------------------------------

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        path = WCEndpoint.PRODUCTS
        return self._json(self._send("POST", path, data=data), path)

    def delete_product(self, product_id: int) -> Dict[str, Any]:
        path = WCEndpoint.product(product_id)
        return self._json(self._send("DELETE", path, params={"force": "true"}), path)

    def delete_variation(self, product_id: int, variation_id: int) -> Dict[str, Any]:
        path = WCEndpoint.variation(product_id, variation_id)
        return self._json(self._send("DELETE", path, params={"force": "true"}), path)


def get_catalog_client() -> CatalogClient:
    """Dependency returning a client for the configured store."""
    return CatalogClient.from_settings()
