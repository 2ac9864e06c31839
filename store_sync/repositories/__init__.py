"""
Repository layer for database operations.

- CatalogItemRepository: catalog mirror reads, upserts and local edits
"""
from store_sync.repositories.catalog_item_repository import CatalogItemRepository

__all__ = ["CatalogItemRepository"]
