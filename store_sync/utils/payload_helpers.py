"""Helper functions for WooCommerce payload normalization."""

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from store_sync.constants.woocommerce import BARCODE_META_KEYS

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
# Leading decimal number, as read by JavaScript parseFloat
LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_decimal(value: Any) -> Decimal:
    """
    Parse a WooCommerce numeric string.

    WooCommerce sends prices and weights as strings and uses "" for unset
    values. The leading number is read ("12.5 USD" is 12.5); anything
    without one, or not finite, becomes 0, so an invalid remote price
    cannot be told apart from a free item.

    Args:
        value: Raw value from the remote payload

    Returns:
        Decimal: Parsed value, or 0
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, (int, float)):
        text = str(value)
    else:
        match = LEADING_NUMBER.match(str(value))
        if not match:
            return ZERO
        text = match.group(0)
    try:
        parsed = Decimal(text.strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not parsed.is_finite():
        return ZERO
    return parsed


def encode_blob(records: Optional[Iterable[Dict[str, Any]]]) -> str:
    """Serialize a list of remote records for a text column."""
    return json.dumps(list(records or []), default=str)


def decode_blob(raw: Optional[str], field: str, remote_id: Any = None) -> List[Dict[str, Any]]:
    """
    Deserialize a JSON array column.

    A malformed value is logged and read as an empty list so one corrupt
    row cannot break a list view.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.error(f"Invalid {field} JSON for product {remote_id}: {raw!r}")
        return []
    if not isinstance(value, list):
        logger.error(f"Expected a JSON array in {field} for product {remote_id}, got {type(value).__name__}")
        return []
    return value


def find_meta_value(
    meta_data: Optional[List[Dict[str, Any]]],
    keys: Iterable[str] = BARCODE_META_KEYS,
) -> Optional[str]:
    """
    Return the value of the first meta_data entry whose key is in ``keys``.

    Entries are scanned in payload order; the first entry matching any of
    the aliases wins.
    """
    wanted = set(keys)
    for entry in meta_data or []:
        if not isinstance(entry, dict):
            continue
        if entry.get("key") in wanted:
            value = entry.get("value")
            if value in (None, ""):
                return None
            return str(value)
    return None
