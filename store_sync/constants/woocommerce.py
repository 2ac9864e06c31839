"""Constants for WooCommerce operations."""


class WCProductType:
    """WooCommerce product type constants."""
    SIMPLE = "simple"
    GROUPED = "grouped"
    EXTERNAL = "external"
    VARIABLE = "variable"
    VARIATION = "variation"


class WCProductStatus:
    """WooCommerce product status constants."""
    ANY = "any"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    PUBLISH = "publish"


class WCApiVersion:
    """WooCommerce API version constants."""
    V3 = "wc/v3"


class WCHeader:
    """Pagination headers sent by the WordPress REST API."""
    TOTAL = "X-WP-Total"
    TOTAL_PAGES = "X-WP-TotalPages"


class WCEndpoint:
    """WooCommerce REST endpoint paths."""
    PRODUCTS = "products"
    CATEGORIES = "products/categories"

    @staticmethod
    def product(product_id: int) -> str:
        return f"products/{product_id}"

    @staticmethod
    def variations(product_id: int) -> str:
        return f"products/{product_id}/variations"

    @staticmethod
    def variation(product_id: int, variation_id: int) -> str:
        return f"products/{product_id}/variations/{variation_id}"


DEFAULT_PER_PAGE = 100

# Keys probed in order in a product's meta_data for its barcode
BARCODE_META_KEYS = ("backup_gudang", "_pos_barcode", "_barcode", "barcode")
