"""
Catalog item repository.

Handles all catalog_items database operations. Every write commits its
own row so a failure never leaves a half-applied batch behind.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from store_sync.models.catalog_item import CatalogItem
from store_sync.models.product_models import PurchaseData

logger = logging.getLogger(__name__)

# Rows flagged per UPDATE statement when marking missing items
MARK_MISSING_CHUNK = 500


class CatalogItemRepository:
    """Repository for catalog item operations."""

    def __init__(self, db: Session):
        """
        Initialize repository with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get_by_remote_id(self, remote_id: int) -> Optional[CatalogItem]:
        """
        Get a catalog item by its WooCommerce ID.

        Args:
            remote_id: WooCommerce product or variation ID

        Returns:
            CatalogItem or None if not found
        """
        return self.db.query(CatalogItem).filter(
            CatalogItem.remote_id == remote_id
        ).first()

    def upsert(self, columns: Dict[str, Any]) -> Tuple[CatalogItem, bool]:
        """
        Insert or update a catalog item keyed by remote_id.

        Local-only fields (purchase state, annotations) are never part of
        ``columns`` and survive every upsert.

        Args:
            columns: Column values including remote_id

        Returns:
            (item, created) where created is True for a new row
        """
        item = self.get_by_remote_id(columns["remote_id"])
        created = item is None
        now = datetime.now()

        if created:
            item = CatalogItem(purchased=False, created_at=now)
            self.db.add(item)

        for key, value in columns.items():
            setattr(item, key, value)
        item.updated_at = now

        self.db.commit()
        self.db.refresh(item)
        return item, created

    def mark_missing(self, remote_id: int) -> bool:
        """
        Flag one item as missing from WooCommerce.

        Returns:
            True if a row was flagged
        """
        item = self.get_by_remote_id(remote_id)
        if not item:
            return False
        if not item.is_missing_from_woo:
            item.is_missing_from_woo = True
            item.updated_at = datetime.now()
            self.db.commit()
        return True

    def mark_missing_except(
        self,
        seen_remote_ids: Iterable[int],
        skip_parent_ids: Optional[Iterable[int]] = None,
    ) -> int:
        """
        Flag every present item whose remote_id was not seen.

        Args:
            seen_remote_ids: Remote IDs observed in a full fetch
            skip_parent_ids: Parents whose variations were not fetched; their
                variation rows are left alone

        Returns:
            Number of rows flagged
        """
        seen: Set[int] = set(seen_remote_ids)
        skip_parents: Set[int] = set(skip_parent_ids or ())
        rows = self.db.query(
            CatalogItem.id, CatalogItem.remote_id, CatalogItem.parent_remote_id
        ).filter(
            CatalogItem.is_missing_from_woo == False  # noqa: E712
        ).all()
        stale_ids = [
            row.id for row in rows
            if row.remote_id not in seen and row.parent_remote_id not in skip_parents
        ]

        now = datetime.now()
        for start in range(0, len(stale_ids), MARK_MISSING_CHUNK):
            chunk = stale_ids[start:start + MARK_MISSING_CHUNK]
            self.db.query(CatalogItem).filter(
                CatalogItem.id.in_(chunk)
            ).update(
                {"is_missing_from_woo": True, "updated_at": now},
                synchronize_session=False,
            )
        self.db.commit()
        return len(stale_ids)

    def list_all(self) -> List[CatalogItem]:
        """All items, unpurchased first, newest remote IDs first."""
        return self.db.query(CatalogItem).order_by(
            CatalogItem.purchased.asc(),
            CatalogItem.remote_id.desc()
        ).all()

    def list_low_stock(self) -> List[CatalogItem]:
        """Unpurchased items, lowest stock first."""
        return self.db.query(CatalogItem).filter(
            CatalogItem.purchased == False  # noqa: E712
        ).order_by(
            CatalogItem.stock_quantity.asc(),
            CatalogItem.remote_id.asc()
        ).all()

    def list_purchased(self) -> List[CatalogItem]:
        """Purchased items, most recently changed first."""
        return self.db.query(CatalogItem).filter(
            CatalogItem.purchased == True  # noqa: E712
        ).order_by(
            CatalogItem.updated_at.desc(),
            CatalogItem.remote_id.desc()
        ).all()

    def set_purchased(
        self,
        remote_id: int,
        purchased: bool,
        purchase_data: Optional[PurchaseData] = None
    ) -> Optional[CatalogItem]:
        """
        Flip the purchased flag.

        Marking purchased stamps purchased_at and stores any provided
        purchase details. Unmarking clears purchased_at only.

        Returns:
            Updated item or None if not found
        """
        item = self.get_by_remote_id(remote_id)
        if not item:
            return None

        now = datetime.now()
        item.purchased = purchased
        item.purchased_at = now if purchased else None
        if purchased and purchase_data is not None:
            self._apply_purchase_data(item, purchase_data)
        item.updated_at = now

        self.db.commit()
        self.db.refresh(item)
        return item

    def update_purchase_data(self, remote_id: int, purchase_data: PurchaseData) -> Optional[CatalogItem]:
        item = self.get_by_remote_id(remote_id)
        if not item:
            return None
        self._apply_purchase_data(item, purchase_data)
        item.updated_at = datetime.now()
        self.db.commit()
        self.db.refresh(item)
        return item

    def update_fields(self, remote_id: int, **kwargs) -> Optional[CatalogItem]:
        """
        Update arbitrary columns of one item.

        Args:
            remote_id: WooCommerce ID of the item
            **kwargs: Fields to update

        Returns:
            Updated item or None if not found

        Raises:
            ValueError: If a field is not a catalog_items column
        """
        columns = set(CatalogItem.__table__.columns.keys())
        unknown = [key for key in kwargs if key not in columns]
        if unknown:
            raise ValueError(f"Unknown catalog item field(s): {', '.join(unknown)}")
        item = self.get_by_remote_id(remote_id)
        if not item:
            return None
        for key, value in kwargs.items():
            setattr(item, key, value)
        item.updated_at = datetime.now()
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, remote_id: int) -> bool:
        item = self.get_by_remote_id(remote_id)
        if not item:
            return False
        self.db.delete(item)
        self.db.commit()
        return True

    @staticmethod
    def _apply_purchase_data(item: CatalogItem, purchase_data: PurchaseData) -> None:
        # Only fields present in the request are written
        for key, value in purchase_data.model_dump(exclude_unset=True).items():
            setattr(item, key, value)
