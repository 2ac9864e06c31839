from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from store_sync.utils.payload_helpers import parse_decimal


class RemoteProduct(BaseModel):
    """Product record as returned by the WooCommerce products endpoint"""

    id: int
    # Set on variations, including ones fetched through products/{id}
    parent_id: Optional[int] = None
    name: str = ""
    slug: Optional[str] = None
    sku: Optional[str] = None
    type: str = "simple"
    status: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None

    # Prices arrive as strings; unparseable or absent values become 0
    price: Decimal = Decimal("0")
    regular_price: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    weight: Decimal = Decimal("0")

    stock_quantity: int = 0
    stock_status: Optional[str] = None

    images: List[Dict[str, Any]] = Field(default_factory=list)
    categories: List[Dict[str, Any]] = Field(default_factory=list)
    attributes: List[Dict[str, Any]] = Field(default_factory=list)
    meta_data: List[Dict[str, Any]] = Field(default_factory=list)

    class Config:
        extra = "ignore"

    @field_validator("price", "regular_price", "sale_price", "weight", mode="before")
    @classmethod
    def coerce_decimal(cls, value):
        return parse_decimal(value)

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def coerce_stock(cls, value):
        try:
            return int(value) if value is not None else 0
        except (TypeError, ValueError):
            return 0

    @field_validator("parent_id", mode="before")
    @classmethod
    def coerce_parent(cls, value):
        # WooCommerce sends 0 for top-level products
        return value or None

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value):
        return value or ""

    @field_validator("images", "categories", "attributes", "meta_data", mode="before")
    @classmethod
    def coerce_list(cls, value):
        return value if isinstance(value, list) else []


class RemoteVariation(RemoteProduct):
    """Variation record from products/{id}/variations"""

    type: str = "variation"
    image: Optional[Dict[str, Any]] = None

    @field_validator("image", mode="before")
    @classmethod
    def coerce_image(cls, value):
        return value if isinstance(value, dict) and value else None


class PurchaseData(BaseModel):
    """Procurement details recorded when an item is bought"""
    purchase_package: Optional[int] = None
    purchase_qty: Optional[int] = None
    purchase_price: Optional[Decimal] = None
    purchase_currency: Optional[str] = None


class ItemSyncOutcome(BaseModel):
    """Result of reconciling one remote record"""
    remote_id: Optional[int] = None
    kind: str
    success: bool
    action: str  # created, updated, error
    error_type: Optional[str] = None
    message: Optional[str] = None


class CatalogSyncResult(BaseModel):
    """Report of one full reconciliation pass"""
    success: bool
    synced: int = 0
    errors: int = 0
    total: int = 0
    marked_missing: int = 0
    outcomes: List[ItemSyncOutcome] = Field(default_factory=list)
    stale_views: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    sync_duration_seconds: Optional[float] = None

    @property
    def failed_outcomes(self) -> List[ItemSyncOutcome]:
        return [o for o in self.outcomes if not o.success]


class SingleSyncResult(BaseModel):
    """Report of a targeted single-item sync"""
    success: bool
    status: str  # synced, not_found, error
    remote_id: int
    parent_remote_id: Optional[int] = None
    stale_views: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class MutationResult(BaseModel):
    """Outcome of a local single-row mutation"""
    success: bool
    remote_id: Optional[int] = None
    stale_views: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class SearchHit(BaseModel):
    id: int
    name: str
    sku: Optional[str] = None
    type: Optional[str] = None
    parent_id: Optional[int] = None
    attributes: List[Dict[str, Any]] = Field(default_factory=list)
    price: Decimal = Decimal("0")
    regular_price: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    stock_quantity: int = 0
    image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    description: str = ""
    barcode: Optional[str] = None
    slug: Optional[str] = None


class SearchResult(BaseModel):
    products: List[SearchHit] = Field(default_factory=list)
    total_pages: int = 0
    total_items: int = 0


class CatalogItemRead(BaseModel):
    """Catalog row with its JSON columns decoded"""
    remote_id: int
    parent_remote_id: Optional[int] = None
    kind: str
    name: str
    slug: Optional[str] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    status: Optional[str] = None
    stock_status: Optional[str] = None
    stock_quantity: int = 0
    price: Decimal = Decimal("0")
    regular_price: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    weight: Decimal = Decimal("0")
    barcode: Optional[str] = None
    images: List[Dict[str, Any]] = Field(default_factory=list)
    categories: List[Dict[str, Any]] = Field(default_factory=list)
    attributes: List[Dict[str, Any]] = Field(default_factory=list)
    purchased: bool = False
    purchased_at: Optional[datetime] = None
    purchase_package: Optional[int] = None
    purchase_qty: Optional[int] = None
    purchase_price: Optional[Decimal] = None
    purchase_currency: Optional[str] = None
    is_missing_from_woo: bool = False
    store_name: Optional[str] = None
    keterangan: Optional[str] = None
    updated_at: Optional[datetime] = None


class CatalogItemCreate(BaseModel):
    """Request to create a product in WooCommerce and mirror it locally"""
    name: str
    type: str = "simple"
    status: str = "publish"
    sku: Optional[str] = None
    regular_price: Optional[str] = None
    sale_price: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    manage_stock: bool = False
    stock_quantity: Optional[int] = None
    weight: Optional[str] = None
    categories: Optional[List[Dict[str, Any]]] = None
    # Already uploaded image URLs, forwarded as-is
    image_urls: List[str] = Field(default_factory=list)


class StoreNameUpdate(BaseModel):
    store_name: Optional[str] = None


class KeteranganUpdate(BaseModel):
    keterangan: Optional[str] = None


class PurchaseToggleRequest(BaseModel):
    purchased: bool
    purchase_data: Optional[PurchaseData] = None
