#!/usr/bin/env python3
"""Run one catalog sync pass from WooCommerce into the local database."""

import argparse
import logging
import sys

from store_sync.core.config import settings
from store_sync.db.session import SessionLocal
from store_sync.services.catalog_sync import sync_catalog, sync_single_item

logger = logging.getLogger("store_sync.scripts.run_sync")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--item",
        type=int,
        help="Re-sync a single WooCommerce product (or variation with --parent)",
    )
    parser.add_argument("--parent", type=int, help="Parent product ID of --item")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db = SessionLocal()
    try:
        if args.item is not None:
            single = sync_single_item(db, args.item, parent_remote_id=args.parent)
            logger.info(f"Item {args.item}: {single.status}")
            return 0 if single.success else 1

        result = sync_catalog(db)
    finally:
        db.close()

    if not result.success:
        logger.error(f"Sync failed: {result.error}")
        return 1

    logger.info(
        f"Synced {result.synced}/{result.total} items, {result.errors} errors, "
        f"{result.marked_missing} flagged missing in {result.sync_duration_seconds}s"
    )
    for outcome in result.failed_outcomes:
        logger.warning(f"{outcome.kind} {outcome.remote_id}: {outcome.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
