"""Data converters between WooCommerce payloads and catalog rows."""

import logging
from typing import Any, Dict, Optional

from store_sync.constants.woocommerce import WCProductType
from store_sync.models.catalog_item import CatalogItem
from store_sync.models.product_models import (
    CatalogItemCreate,
    CatalogItemRead,
    RemoteProduct,
    RemoteVariation,
    SearchHit,
)
from store_sync.utils.payload_helpers import decode_blob, encode_blob, find_meta_value

__logger__ = logging.getLogger(__name__)


def product_to_columns(product: RemoteProduct) -> Dict[str, Any]:
    """
    Map a remote product onto catalog_items columns.

    Args:
        product: Decoded WooCommerce product

    Returns:
        Column values for an upsert keyed by remote_id
    """
    return {
        "remote_id": product.id,
        "parent_remote_id": None,
        "kind": product.type or WCProductType.SIMPLE,
        "name": product.name,
        "slug": product.slug,
        "sku": product.sku,
        "description": product.description,
        "short_description": product.short_description,
        "status": product.status,
        "stock_status": product.stock_status,
        "stock_quantity": product.stock_quantity,
        "price": product.price,
        "regular_price": product.regular_price,
        "sale_price": product.sale_price,
        "weight": product.weight,
        "barcode": find_meta_value(product.meta_data),
        "images": encode_blob(product.images),
        "categories": encode_blob(product.categories),
        "attributes": encode_blob(product.attributes),
        "is_missing_from_woo": False,
    }


def variation_to_columns(
    variation: RemoteVariation,
    parent_id: int,
    parent_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Map a remote variation onto catalog_items columns.

    Variations carry their parent's name and a single image, which is
    stored as a one element image list.
    """
    columns = product_to_columns(variation)
    columns.update({
        "parent_remote_id": parent_id,
        "kind": WCProductType.VARIATION,
        "name": parent_name or variation.name or f"Variation #{variation.id}",
        "images": encode_blob([variation.image] if variation.image else []),
        "categories": encode_blob([]),
    })
    return columns


def remote_to_search_hit(raw: Dict[str, Any], parent_id: Optional[int] = None) -> SearchHit:
    """Convert a product or variation payload into a search hit."""
    if parent_id is not None:
        record = RemoteVariation.model_validate(raw)
        images = [record.image] if record.image else []
        name = record.name or f"Variation #{record.id}"
        kind = WCProductType.VARIATION
    else:
        record = RemoteProduct.model_validate(raw)
        images = record.images
        name = record.name
        kind = record.type

    image_urls = [img.get("src") for img in images if isinstance(img, dict) and img.get("src")]
    return SearchHit(
        id=record.id,
        name=name,
        sku=record.sku,
        type=kind,
        parent_id=parent_id,
        attributes=record.attributes,
        price=record.price,
        regular_price=record.regular_price,
        sale_price=record.sale_price,
        stock_quantity=record.stock_quantity,
        image=image_urls[0] if image_urls else None,
        images=image_urls,
        description=record.description or "",
        barcode=find_meta_value(record.meta_data),
        slug=record.slug,
    )


def catalog_item_create_to_woocommerce(item: CatalogItemCreate) -> Dict[str, Any]:
    """Build the products POST body; staged image URLs are forwarded as-is."""
    data = item.model_dump(exclude_none=True, exclude={"image_urls"})
    if item.image_urls:
        data["images"] = [{"src": url} for url in item.image_urls]
    return data


def catalog_item_to_read(item: CatalogItem) -> CatalogItemRead:
    """Decode a catalog row for list views."""
    return CatalogItemRead(
        remote_id=item.remote_id,
        parent_remote_id=item.parent_remote_id,
        kind=item.kind,
        name=item.name,
        slug=item.slug,
        sku=item.sku,
        description=item.description,
        short_description=item.short_description,
        status=item.status,
        stock_status=item.stock_status,
        stock_quantity=item.stock_quantity or 0,
        price=item.price or 0,
        regular_price=item.regular_price or 0,
        sale_price=item.sale_price or 0,
        weight=item.weight or 0,
        barcode=item.barcode,
        images=decode_blob(item.images, "images", item.remote_id),
        categories=decode_blob(item.categories, "categories", item.remote_id),
        attributes=decode_blob(item.attributes, "attributes", item.remote_id),
        purchased=bool(item.purchased),
        purchased_at=item.purchased_at,
        purchase_package=item.purchase_package,
        purchase_qty=item.purchase_qty,
        purchase_price=item.purchase_price,
        purchase_currency=item.purchase_currency,
        is_missing_from_woo=bool(item.is_missing_from_woo),
        store_name=item.store_name,
        keterangan=item.keterangan,
        updated_at=item.updated_at,
    )
