"""Read views over the local catalog mirror."""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from store_sync.models.product_models import CatalogItemRead
from store_sync.repositories import CatalogItemRepository
from store_sync.services.woocommerce.converters import catalog_item_to_read

logger = logging.getLogger(__name__)


def list_all_items(db: Session) -> List[CatalogItemRead]:
    """Every item, missing ones included."""
    try:
        items = CatalogItemRepository(db).list_all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching products from DB: {e}")
        return []
    return [catalog_item_to_read(item) for item in items]


def list_low_stock_items(db: Session) -> List[CatalogItemRead]:
    try:
        items = CatalogItemRepository(db).list_low_stock()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching low stock products from DB: {e}")
        return []
    return [catalog_item_to_read(item) for item in items]


def list_purchased_items(db: Session) -> List[CatalogItemRead]:
    try:
        items = CatalogItemRepository(db).list_purchased()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching purchased products from DB: {e}")
        return []
    return [catalog_item_to_read(item) for item in items]
