"""WooCommerce product management."""

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from store_sync.constants.sync import StaleView
from store_sync.constants.woocommerce import WCProductType
from store_sync.core.exceptions import (
    WooCommerceError,
    WooCommerceNotFoundError,
)
from store_sync.models.product_models import (
    CatalogItemCreate,
    MutationResult,
    RemoteProduct,
)
from store_sync.repositories import CatalogItemRepository
from store_sync.services.view_events import StaleViewNotifier, get_notifier
from store_sync.services.woocommerce.client import CatalogClient
from store_sync.services.woocommerce.converters import (
    catalog_item_create_to_woocommerce,
    product_to_columns,
)

__logger__ = logging.getLogger(__name__)


def create_item(
    db: Session,
    item: CatalogItemCreate,
    client: Optional[CatalogClient] = None,
    notifier: Optional[StaleViewNotifier] = None,
) -> MutationResult:
    """
    Create a product in WooCommerce and mirror the created record locally.

    Image URLs must already be uploaded; cleaning up staged files is the
    caller's job once this returns.

    Args:
        db: Database session
        item: Product data with staged image URLs
        client: WooCommerce catalog client (built from settings if None)

    Returns:
        MutationResult carrying the new WooCommerce ID
    """
    try:
        client = client or CatalogClient.from_settings()
        created = client.create_product(catalog_item_create_to_woocommerce(item))
    except WooCommerceError as e:
        __logger__.error(f"Error creating product {item.name} in WooCommerce: {e}")
        return MutationResult(success=False, error=str(e))

    remote_id = created.get("id")
    __logger__.info(f"WooCommerce product created: {created.get('name')} ({remote_id})")
    try:
        CatalogItemRepository(db).upsert(product_to_columns(RemoteProduct.model_validate(created)))
    except (ValidationError, SQLAlchemyError) as e:
        db.rollback()
        __logger__.error(f"Product {remote_id} created remotely but not stored locally: {e}")
        return MutationResult(
            success=False,
            remote_id=remote_id,
            error=f"Created in WooCommerce but not stored locally: {e}",
        )

    views = (notifier or get_notifier()).publish(StaleView.ALL)
    return MutationResult(success=True, remote_id=remote_id, stale_views=views)


def delete_item(
    db: Session,
    remote_id: int,
    client: Optional[CatalogClient] = None,
    notifier: Optional[StaleViewNotifier] = None,
) -> MutationResult:
    """
    Delete an item from WooCommerce, then remove its local row.

    A remote 404 counts as already deleted. Any other remote failure keeps
    the local row.
    """
    repo = CatalogItemRepository(db)
    item = repo.get_by_remote_id(remote_id)
    if item is None:
        return MutationResult(success=False, remote_id=remote_id, error=f"Product {remote_id} not found")

    try:
        client = client or CatalogClient.from_settings()
        if item.kind == WCProductType.VARIATION and item.parent_remote_id is not None:
            client.delete_variation(item.parent_remote_id, remote_id)
        else:
            client.delete_product(remote_id)
    except WooCommerceNotFoundError:
        __logger__.warning(f"Product {remote_id} already absent from WooCommerce")
    except WooCommerceError as e:
        __logger__.error(f"Error deleting product {remote_id} from WooCommerce: {e}")
        return MutationResult(success=False, remote_id=remote_id, error=str(e))

    try:
        repo.delete(remote_id)
    except SQLAlchemyError as e:
        db.rollback()
        __logger__.error(f"Product {remote_id} deleted remotely but not locally: {e}")
        return MutationResult(success=False, remote_id=remote_id, error=str(e))

    views = (notifier or get_notifier()).publish(StaleView.ALL)
    return MutationResult(success=True, remote_id=remote_id, stale_views=views)
