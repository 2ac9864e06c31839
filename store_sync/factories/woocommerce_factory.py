"""Factory for creating WooCommerce API clients."""

from woocommerce import API

from store_sync.core.config import WooCommerceConfig, settings


class WooCommerceClientFactory:
    """Factory class for creating WooCommerce API clients."""

    @staticmethod
    def from_config(config: WooCommerceConfig) -> API:
        """
        Create a WooCommerce API client from a store configuration.

        Args:
            config: Validated store URL and consumer credentials

        Returns:
            API: Configured WooCommerce API client
        """
        config.validate_credentials()
        return API(
            url=config.url.rstrip("/"),
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            wp_api=True,
            version=settings.wc_api_version,
            timeout=settings.wc_request_timeout,
            verify_ssl=settings.wc_verify_ssl
        )
