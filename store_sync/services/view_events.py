"""
Stale view notifications.

Catalog mutations announce which list views (all products, low stock,
purchased) need re-rendering. Subscribers in this process are called
directly; when a Redis URL is configured the same message is published on
a pub/sub channel for other processes. Delivery is fire-and-forget.
"""
import json
import logging
from typing import Callable, Iterable, List, Optional

import redis

from store_sync.core.config import settings

__logger__ = logging.getLogger(__name__)

StaleViewCallback = Callable[[List[str]], None]


class StaleViewNotifier:
    """Publish/subscribe registry for stale view names."""

    def __init__(self, redis_client: Optional[redis.Redis] = None, channel: Optional[str] = None):
        self._subscribers: List[StaleViewCallback] = []
        self.redis_client = redis_client
        self.channel = channel or settings.stale_view_channel

    def subscribe(self, callback: StaleViewCallback) -> StaleViewCallback:
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: StaleViewCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, views: Iterable[str]) -> List[str]:
        """
        Announce stale views.

        A failing subscriber or Redis outage is logged and never reaches
        the caller.

        Returns:
            The de-duplicated view names that were announced
        """
        stale = list(dict.fromkeys(views))
        if not stale:
            return stale

        for callback in list(self._subscribers):
            try:
                callback(stale)
            except Exception as e:
                __logger__.warning(f"Stale view subscriber {callback!r} failed: {e}")

        if self.redis_client is not None:
            try:
                self.redis_client.publish(self.channel, json.dumps({"stale_views": stale}))
            except redis.RedisError as e:
                __logger__.warning(f"Could not publish stale views to Redis: {e}")

        __logger__.debug(f"Stale views announced: {stale}")
        return stale


def _build_redis_client() -> Optional[redis.Redis]:
    if not settings.redis_url:
        return None
    try:
        client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
        __logger__.info("Redis client initialized for stale view notifications")
        return client
    except (redis.RedisError, ValueError) as e:
        __logger__.warning(f"Failed to initialize Redis client: {e}. Stale views stay in-process.")
        return None


_notifier: Optional[StaleViewNotifier] = None


def get_notifier() -> StaleViewNotifier:
    """Get or create the process-wide notifier."""
    global _notifier
    if _notifier is None:
        _notifier = StaleViewNotifier(redis_client=_build_redis_client())
    return _notifier


def set_notifier(notifier: Optional[StaleViewNotifier]) -> None:
    """Replace the process-wide notifier (None resets it)."""
    global _notifier
    _notifier = notifier
