"""
Celery application for background catalog sync.
"""
from celery import Celery
from store_sync.core.config import settings

celery_app = Celery(
    "store_sync",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "store_sync.tasks.sync_tasks",
    ]
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    enable_utc=True,

    task_track_started=True,
    # A full pass pages through the whole catalog
    task_time_limit=60 * 60,
    task_soft_time_limit=55 * 60,

    worker_prefetch_multiplier=1,

    result_expires=7200,

    broker_connection_retry_on_startup=True,
)

if settings.catalog_sync_interval_seconds:
    celery_app.conf.beat_schedule = {
        'catalog-sync': {
            'task': 'store_sync.tasks.sync_tasks.sync_catalog_task',
            'schedule': settings.catalog_sync_interval_seconds,
        },
    }

if __name__ == '__main__':
    celery_app.start()
