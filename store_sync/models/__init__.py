from store_sync.models.catalog_item import CatalogItem

__all__ = ["CatalogItem"]
