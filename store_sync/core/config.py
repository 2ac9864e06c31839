from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings

from store_sync.constants.sync import MISSING_SAFETY_THRESHOLD
from store_sync.constants.woocommerce import DEFAULT_PER_PAGE, WCApiVersion
from store_sync.core.exceptions import WooCommerceConfigError


class WooCommerceConfig(BaseModel):
    """Connection values for one WooCommerce store."""
    url: str
    consumer_key: str
    consumer_secret: str

    def validate_credentials(self) -> "WooCommerceConfig":
        missing = [
            name for name in ("url", "consumer_key", "consumer_secret")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise WooCommerceConfigError(
                f"WooCommerce API credentials are not configured: missing {', '.join(missing)}"
            )
        return self


class Settings(BaseSettings):
    database_url: str = "sqlite:///./store_sync.db"
    log_level: str = "INFO"
    wc_base_url: str = ""
    wc_consumer_key: str = ""
    wc_consumer_secret: str = ""
    wc_api_version: str = WCApiVersion.V3
    wc_request_timeout: int = 60
    wc_verify_ssl: bool = True
    wc_per_page: int = DEFAULT_PER_PAGE
    missing_safety_threshold: int = MISSING_SAFETY_THRESHOLD
    redis_url: str = ""
    stale_view_channel: str = "store_sync:stale_views"
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/0"
    catalog_sync_interval_seconds: Optional[float] = None

    class Config:
        env_file = ".env"

    def woocommerce_config(self) -> WooCommerceConfig:
        """
        Build the WooCommerce connection config from the environment.

        Raises:
            WooCommerceConfigError: If any of the three values is missing
        """
        return WooCommerceConfig(
            url=self.wc_base_url,
            consumer_key=self.wc_consumer_key,
            consumer_secret=self.wc_consumer_secret,
        ).validate_credentials()


settings = Settings()
