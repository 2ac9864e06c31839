"""
Local purchase workflow and annotations for catalog items.

Every operation updates a single row keyed by remote_id and announces the
list views it made stale.
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from store_sync.constants.sync import StaleView
from store_sync.models.product_models import MutationResult, PurchaseData
from store_sync.repositories import CatalogItemRepository
from store_sync.services.view_events import StaleViewNotifier, get_notifier

logger = logging.getLogger(__name__)


def _not_found(remote_id: int) -> MutationResult:
    return MutationResult(
        success=False,
        remote_id=remote_id,
        error=f"Product {remote_id} not found",
    )


def toggle_purchased(
    db: Session,
    remote_id: int,
    purchased: bool,
    purchase_data: Optional[PurchaseData] = None,
    notifier: Optional[StaleViewNotifier] = None,
) -> MutationResult:
    """
    Mark an item purchased or not purchased.

    Purchasing stamps purchased_at and stores the given purchase details.
    Un-purchasing clears purchased_at and keeps the purchase details.
    """
    try:
        item = CatalogItemRepository(db).set_purchased(remote_id, purchased, purchase_data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error toggling purchased state of {remote_id}: {e}")
        return MutationResult(success=False, remote_id=remote_id, error=str(e))

    if item is None:
        return _not_found(remote_id)

    views = (notifier or get_notifier()).publish(StaleView.ALL)
    return MutationResult(success=True, remote_id=remote_id, stale_views=views)


def update_purchase_data(
    db: Session,
    remote_id: int,
    purchase_data: PurchaseData,
    notifier: Optional[StaleViewNotifier] = None,
) -> MutationResult:
    """Edit the purchase details without touching the purchased flag."""
    try:
        item = CatalogItemRepository(db).update_purchase_data(remote_id, purchase_data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating purchase data of {remote_id}: {e}")
        return MutationResult(success=False, remote_id=remote_id, error=str(e))

    if item is None:
        return _not_found(remote_id)

    views = (notifier or get_notifier()).publish(StaleView.ALL)
    return MutationResult(success=True, remote_id=remote_id, stale_views=views)


def _update_annotation(
    db: Session,
    remote_id: int,
    notifier: Optional[StaleViewNotifier],
    **fields,
) -> MutationResult:
    try:
        item = CatalogItemRepository(db).update_fields(remote_id, **fields)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating {', '.join(fields)} of {remote_id}: {e}")
        return MutationResult(success=False, remote_id=remote_id, error=str(e))

    if item is None:
        return _not_found(remote_id)

    views = (notifier or get_notifier()).publish(StaleView.ANNOTATION)
    return MutationResult(success=True, remote_id=remote_id, stale_views=views)


def update_store_name(
    db: Session,
    remote_id: int,
    store_name: Optional[str],
    notifier: Optional[StaleViewNotifier] = None,
) -> MutationResult:
    return _update_annotation(db, remote_id, notifier, store_name=store_name)


def update_keterangan(
    db: Session,
    remote_id: int,
    keterangan: Optional[str],
    notifier: Optional[StaleViewNotifier] = None,
) -> MutationResult:
    return _update_annotation(db, remote_id, notifier, keterangan=keterangan)
