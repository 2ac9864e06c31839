"""
Celery tasks for catalog synchronization from WooCommerce.
"""
import logging
from typing import Any, Dict

from celery import Task

from store_sync.celery_app import celery_app
from store_sync.db.session import SessionLocal
from store_sync.services.catalog_sync import sync_catalog

logger = logging.getLogger(__name__)


class DatabaseTask(Task):
    """Base task with database session management."""
    _db = None

    @property
    def db(self):
        if self._db is None:
            self._db = SessionLocal()
        return self._db

    def after_return(self, *args, **kwargs):
        if self._db is not None:
            self._db.close()
            self._db = None


@celery_app.task(
    bind=True,
    base=DatabaseTask,
    name="store_sync.tasks.sync_tasks.sync_catalog_task",
)
def sync_catalog_task(self) -> Dict[str, Any]:
    """
    Run one full catalog reconciliation pass.

    No retry: the next trigger runs a fresh pass.

    Returns:
        Dict with the pass counts (per-item outcomes omitted)
    """
    logger.info(f"Catalog sync task {self.request.id} started")
    result = sync_catalog(self.db)
    if not result.success:
        logger.error(f"Catalog sync task {self.request.id} failed: {result.error}")
    return result.model_dump(mode="json", exclude={"outcomes"})
