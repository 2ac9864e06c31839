"""Constants for sync operations."""

# A full pass must see more remote ids than this before rows absent from it
# are flagged as missing from WooCommerce.
MISSING_SAFETY_THRESHOLD = 500


class SyncAction:
    """Per-item sync action constants."""
    CREATED = "created"
    UPDATED = "updated"
    ERROR = "error"


class SingleSyncStatus:
    """Outcome of a targeted single-item sync."""
    SYNCED = "synced"
    NOT_FOUND = "not_found"
    ERROR = "error"


class SyncErrorType:
    """Error categories carried by per-item outcomes."""
    UPSERT = "upsert_failed"
    VARIATION_FETCH = "variation_fetch_failed"


class StaleView:
    """List views whose renderings go stale after catalog mutations."""
    ALL_PRODUCTS = "all_products"
    LOW_STOCK = "low_stock"
    PURCHASED = "purchased"

    ALL = (ALL_PRODUCTS, LOW_STOCK, PURCHASED)
    ANNOTATION = (ALL_PRODUCTS, LOW_STOCK)
