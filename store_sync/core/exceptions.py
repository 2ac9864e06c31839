"""Errors raised at the WooCommerce client boundary."""

from typing import Optional


class WooCommerceError(Exception):
    """Base class for WooCommerce integration errors."""


class WooCommerceConfigError(WooCommerceError):
    """Store URL, consumer key or consumer secret is missing."""


class WooCommerceAPIError(WooCommerceError):
    """Non-success response or transport failure from the WooCommerce API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        page: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.page = page


class WooCommerceNotFoundError(WooCommerceAPIError):
    """The targeted product or variation does not exist remotely (HTTP 404)."""

    def __init__(self, message: str, page: Optional[int] = None):
        super().__init__(message, status_code=404, page=page)
