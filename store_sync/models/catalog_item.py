from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
    func,
)

from store_sync.db.base import Base


class CatalogItem(Base):
    """Local mirror of a WooCommerce product or variation."""
    __tablename__ = "catalog_items"

    id = Column(Integer, primary_key=True, index=True)
    remote_id = Column(Integer, unique=True, nullable=False, index=True)
    parent_remote_id = Column(Integer, nullable=True, index=True)
    kind = Column(String(32), nullable=False, default="simple")

    name = Column(String, nullable=False, default="")
    slug = Column(String, nullable=True)
    sku = Column(String, nullable=True, index=True)
    description = Column(Text, nullable=True)
    short_description = Column(Text, nullable=True)
    status = Column(String(32), nullable=True)
    stock_status = Column(String(32), nullable=True)
    stock_quantity = Column(Integer, nullable=False, default=0)

    price = Column(Numeric(14, 2), nullable=False, default=0)
    regular_price = Column(Numeric(14, 2), nullable=False, default=0)
    sale_price = Column(Numeric(14, 2), nullable=False, default=0)
    weight = Column(Numeric(10, 3), nullable=False, default=0)
    barcode = Column(String, nullable=True)

    # JSON encoded arrays of remote records
    images = Column(Text, nullable=True)
    categories = Column(Text, nullable=True)
    attributes = Column(Text, nullable=True)

    purchased = Column(Boolean, nullable=False, default=False)
    purchased_at = Column(DateTime, nullable=True)
    purchase_package = Column(Integer, nullable=True)
    purchase_qty = Column(Integer, nullable=True)
    purchase_price = Column(Numeric(14, 2), nullable=True)
    purchase_currency = Column(String(8), nullable=True)

    is_missing_from_woo = Column(Boolean, nullable=False, default=False, index=True)
    store_name = Column(String, nullable=True)
    keterangan = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
