from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from store_sync.core.exceptions import WooCommerceConfigError
from store_sync.db.session import get_db
from store_sync.models.product_models import (
    CatalogItemCreate,
    CatalogItemRead,
    CatalogSyncResult,
    KeteranganUpdate,
    MutationResult,
    PurchaseData,
    PurchaseToggleRequest,
    SearchHit,
    SearchResult,
    SingleSyncResult,
    StoreNameUpdate,
)
from store_sync.services import catalog_views, purchase
from store_sync.services.catalog_sync import sync_catalog, sync_single_item
from store_sync.services.search import list_variations, search_products
from store_sync.services.woocommerce import (
    CatalogClient,
    create_item,
    delete_item,
    get_catalog_client,
    list_categories,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])

_logger = logging.getLogger(__name__)


def catalog_client() -> CatalogClient:
    """Client dependency; missing credentials make the route unavailable."""
    try:
        return get_catalog_client()
    except WooCommerceConfigError as e:
        _logger.error(str(e))
        raise HTTPException(status_code=503, detail=str(e))


# ==================== Sync ====================

@router.post("/sync", response_model=CatalogSyncResult)
def run_catalog_sync(
    db: Session = Depends(get_db),
    client: CatalogClient = Depends(catalog_client),
):
    """Pull the whole WooCommerce catalog into the local mirror."""
    return sync_catalog(db, client=client)


@router.post("/sync/{remote_id}", response_model=SingleSyncResult)
def run_single_sync(
    remote_id: int,
    parent_id: Optional[int] = Query(None, description="Parent product ID when syncing a variation"),
    db: Session = Depends(get_db),
    client: CatalogClient = Depends(catalog_client),
):
    return sync_single_item(db, remote_id, parent_remote_id=parent_id, client=client)


# ==================== Local views ====================

@router.get("/items", response_model=List[CatalogItemRead])
def get_all_items(db: Session = Depends(get_db)):
    return catalog_views.list_all_items(db)


@router.get("/items/low-stock", response_model=List[CatalogItemRead])
def get_low_stock_items(db: Session = Depends(get_db)):
    return catalog_views.list_low_stock_items(db)


@router.get("/items/purchased", response_model=List[CatalogItemRead])
def get_purchased_items(db: Session = Depends(get_db)):
    return catalog_views.list_purchased_items(db)


# ==================== Remote lookups ====================

@router.get("/search", response_model=SearchResult)
async def search(
    q: str = Query("", description="Text or SKU to look for"),
    page: int = Query(1, ge=1),
    client: CatalogClient = Depends(catalog_client),
):
    return await search_products(q, page=page, client=client)


@router.get("/products/{product_id}/variations", response_model=List[SearchHit])
def get_product_variations(
    product_id: int,
    client: CatalogClient = Depends(catalog_client),
):
    return list_variations(product_id, client=client)


@router.get("/categories", response_model=List[Dict[str, Any]])
def get_categories(client: CatalogClient = Depends(catalog_client)):
    return list_categories(client=client)


# ==================== Purchase workflow ====================

@router.post("/items/{remote_id}/purchased", response_model=MutationResult)
def toggle_item_purchased(
    remote_id: int,
    request: PurchaseToggleRequest,
    db: Session = Depends(get_db),
):
    return purchase.toggle_purchased(
        db, remote_id, request.purchased, purchase_data=request.purchase_data
    )


@router.put("/items/{remote_id}/purchase", response_model=MutationResult)
def edit_purchase_data(
    remote_id: int,
    purchase_data: PurchaseData,
    db: Session = Depends(get_db),
):
    return purchase.update_purchase_data(db, remote_id, purchase_data)


@router.put("/items/{remote_id}/store-name", response_model=MutationResult)
def edit_store_name(
    remote_id: int,
    request: StoreNameUpdate,
    db: Session = Depends(get_db),
):
    return purchase.update_store_name(db, remote_id, request.store_name)


@router.put("/items/{remote_id}/keterangan", response_model=MutationResult)
def edit_keterangan(
    remote_id: int,
    request: KeteranganUpdate,
    db: Session = Depends(get_db),
):
    return purchase.update_keterangan(db, remote_id, request.keterangan)


# ==================== Remote maintenance ====================

@router.post("/items", response_model=MutationResult)
def create_catalog_item(
    item: CatalogItemCreate,
    db: Session = Depends(get_db),
    client: CatalogClient = Depends(catalog_client),
):
    return create_item(db, item, client=client)


@router.delete("/items/{remote_id}", response_model=MutationResult)
def delete_catalog_item(
    remote_id: int,
    db: Session = Depends(get_db),
    client: CatalogClient = Depends(catalog_client),
):
    return delete_item(db, remote_id, client=client)
