"""
Catalog reconciliation from WooCommerce into catalog_items.

A full pass fetches the whole remote catalog, upserts every product and
every variation of variable products one row at a time, and flags rows the
pass did not see as missing from WooCommerce. Failures of single rows are
recorded and the pass goes on.
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Set

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from store_sync.constants.sync import (
    SingleSyncStatus,
    StaleView,
    SyncAction,
    SyncErrorType,
)
from store_sync.constants.woocommerce import WCProductType
from store_sync.core.config import settings
from store_sync.core.exceptions import (
    WooCommerceConfigError,
    WooCommerceError,
    WooCommerceNotFoundError,
)
from store_sync.models.product_models import (
    CatalogSyncResult,
    ItemSyncOutcome,
    RemoteProduct,
    RemoteVariation,
    SingleSyncResult,
)
from store_sync.repositories import CatalogItemRepository
from store_sync.services.view_events import StaleViewNotifier, get_notifier
from store_sync.services.woocommerce.client import CatalogClient
from store_sync.services.woocommerce.converters import (
    product_to_columns,
    variation_to_columns,
)

logger = logging.getLogger(__name__)


def _upsert_record(
    repo: CatalogItemRepository,
    remote_id: Optional[int],
    kind: str,
    build_columns: Callable[[], Dict[str, Any]],
) -> ItemSyncOutcome:
    """Upsert one remote record, turning any failure into an outcome."""
    try:
        _, created = repo.upsert(build_columns())
    except Exception as e:
        repo.db.rollback()
        logger.error(f"Failed to upsert {kind} {remote_id}: {e}")
        return ItemSyncOutcome(
            remote_id=remote_id,
            kind=kind,
            success=False,
            action=SyncAction.ERROR,
            error_type=SyncErrorType.UPSERT,
            message=str(e),
        )
    return ItemSyncOutcome(
        remote_id=remote_id,
        kind=kind,
        success=True,
        action=SyncAction.CREATED if created else SyncAction.UPDATED,
    )


def _sync_variations(
    client: CatalogClient,
    repo: CatalogItemRepository,
    parent: Dict[str, Any],
    seen: Set[int],
    unfetched_parents: Set[int],
) -> List[ItemSyncOutcome]:
    parent_id = parent["id"]
    parent_name = parent.get("name")
    try:
        variations = client.fetch_variations(parent_id)
    except WooCommerceError as e:
        logger.error(f"Error fetching variations for product {parent_id}: {e}")
        unfetched_parents.add(parent_id)
        return [ItemSyncOutcome(
            remote_id=parent_id,
            kind=WCProductType.VARIATION,
            success=False,
            action=SyncAction.ERROR,
            error_type=SyncErrorType.VARIATION_FETCH,
            message=str(e),
        )]

    if not variations:
        logger.warning(f"Product {parent_id} is variable but returned 0 variations")

    outcomes = []
    for raw in variations:
        variation_id = raw.get("id")
        if variation_id is not None:
            seen.add(variation_id)
        outcomes.append(_upsert_record(
            repo,
            variation_id,
            WCProductType.VARIATION,
            lambda raw=raw: variation_to_columns(
                RemoteVariation.model_validate(raw), parent_id, parent_name
            ),
        ))
    return outcomes


def sync_catalog(
    db: Session,
    client: Optional[CatalogClient] = None,
    notifier: Optional[StaleViewNotifier] = None,
    missing_threshold: Optional[int] = None,
) -> CatalogSyncResult:
    """
    Run one full reconciliation pass.

    Args:
        db: Database session
        client: WooCommerce catalog client (built from settings if None)
        notifier: Stale view notifier (process-wide one if None)
        missing_threshold: Seen IDs needed before absent rows are flagged
            (settings.missing_safety_threshold if None)

    Returns:
        CatalogSyncResult with counts and per-item outcomes. Only missing
        credentials or a failed catalog fetch produce success=False.
    """
    start_time = time.time()
    if missing_threshold is None:
        missing_threshold = settings.missing_safety_threshold
    logger.info("Starting catalog sync")

    try:
        client = client or CatalogClient.from_settings()
    except WooCommerceConfigError as e:
        logger.error(str(e))
        return CatalogSyncResult(success=False, error=str(e))

    try:
        products = client.fetch_all_products()
    except WooCommerceError as e:
        logger.error(f"Critical sync error: {e}")
        return CatalogSyncResult(success=False, error=str(e))

    logger.info(f"Total items fetched from WooCommerce: {len(products)}")
    if not products:
        return CatalogSyncResult(
            success=True,
            sync_duration_seconds=round(time.time() - start_time, 2),
        )

    repo = CatalogItemRepository(db)
    seen: Set[int] = set()
    # Parents whose variation rows were not refreshed this pass
    unfetched_parents: Set[int] = set()
    outcomes: List[ItemSyncOutcome] = []

    for raw in products:
        remote_id = raw.get("id")
        if remote_id is not None:
            seen.add(remote_id)
        outcome = _upsert_record(
            repo,
            remote_id,
            raw.get("type") or WCProductType.SIMPLE,
            lambda raw=raw: product_to_columns(RemoteProduct.model_validate(raw)),
        )
        outcomes.append(outcome)

        if raw.get("type") != WCProductType.VARIABLE:
            continue
        if not outcome.success:
            logger.warning(f"Skipping variations of product {remote_id}: parent upsert failed")
            if remote_id is not None:
                unfetched_parents.add(remote_id)
            continue
        outcomes.extend(_sync_variations(client, repo, raw, seen, unfetched_parents))

    synced = sum(1 for o in outcomes if o.success)
    errors = len(outcomes) - synced
    result = CatalogSyncResult(
        success=True,
        synced=synced,
        errors=errors,
        total=len(outcomes),
        outcomes=outcomes,
    )

    if len(seen) > missing_threshold:
        try:
            result.marked_missing = repo.mark_missing_except(seen, skip_parent_ids=unfetched_parents)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to flag missing products: {e}")
            result.error = f"Failed to flag missing products: {e}"
        else:
            logger.info(f"Flagged {result.marked_missing} products missing from WooCommerce")
    else:
        logger.warning(
            f"Only {len(seen)} remote IDs seen (threshold {missing_threshold}); "
            f"not flagging missing products"
        )

    result.stale_views = (notifier or get_notifier()).publish(StaleView.ALL)
    result.sync_duration_seconds = round(time.time() - start_time, 2)
    logger.info(f"Sync complete. Success: {synced}, Errors: {errors}")
    return result


def sync_single_item(
    db: Session,
    remote_id: int,
    parent_remote_id: Optional[int] = None,
    client: Optional[CatalogClient] = None,
    notifier: Optional[StaleViewNotifier] = None,
) -> SingleSyncResult:
    """
    Re-sync one product, or one variation when parent_remote_id is given.

    A variation fetched through products/{id} is stored under the parent
    named by its parent_id (or the parent already on its row).

    A 404 flags only this row as missing; it is a deliberate single-item
    check, so the bulk threshold does not apply. Other failures leave the
    missing flag alone.
    """
    result = SingleSyncResult(
        success=False,
        status=SingleSyncStatus.ERROR,
        remote_id=remote_id,
        parent_remote_id=parent_remote_id,
    )
    notifier = notifier or get_notifier()

    try:
        client = client or CatalogClient.from_settings()
    except WooCommerceConfigError as e:
        result.error = str(e)
        return result

    repo = CatalogItemRepository(db)
    try:
        if parent_remote_id is not None:
            raw = client.fetch_variation(parent_remote_id, remote_id)
        else:
            raw = client.fetch_product(remote_id)
    except WooCommerceNotFoundError:
        logger.warning(f"Product {remote_id} not found in WooCommerce; flagging as missing")
        result.status = SingleSyncStatus.NOT_FOUND
        result.error = f"Product {remote_id} not found in WooCommerce"
        try:
            if repo.mark_missing(remote_id):
                result.stale_views = notifier.publish(StaleView.ALL)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to flag product {remote_id} as missing: {e}")
        return result
    except WooCommerceError as e:
        logger.error(f"Error fetching product {remote_id}: {e}")
        result.error = str(e)
        return result

    try:
        existing = repo.get_by_remote_id(remote_id)
        if parent_remote_id is None and raw.get("type") == WCProductType.VARIATION:
            # products/{id} also serves variations; keep them under their parent
            parent_remote_id = RemoteVariation.model_validate(raw).parent_id or (
                existing.parent_remote_id if existing else None
            )
            if parent_remote_id is None:
                result.error = f"Variation {remote_id} has no parent product"
                logger.error(result.error)
                return result
            result.parent_remote_id = parent_remote_id

        if parent_remote_id is not None:
            parent = repo.get_by_remote_id(parent_remote_id)
            parent_name = parent.name if parent else (existing.name if existing else None)
            columns = variation_to_columns(
                RemoteVariation.model_validate(raw), parent_remote_id, parent_name
            )
        else:
            columns = product_to_columns(RemoteProduct.model_validate(raw))
        repo.upsert(columns)
    except (ValidationError, SQLAlchemyError) as e:
        db.rollback()
        logger.error(f"Failed to upsert product {remote_id}: {e}")
        result.error = str(e)
        return result

    result.success = True
    result.status = SingleSyncStatus.SYNCED
    result.stale_views = notifier.publish(StaleView.ALL)
    return result
