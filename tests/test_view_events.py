"""Stale view notifier tests."""
import json

import redis

from store_sync.services.view_events import StaleViewNotifier


class RecordingRedis:
    def __init__(self, fail=False):
        self.messages = []
        self.fail = fail

    def publish(self, channel, message):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.messages.append((channel, message))
        return 1


def test_publish_calls_subscribers_with_unique_views():
    notifier = StaleViewNotifier(channel="views")
    received = []
    notifier.subscribe(received.append)

    announced = notifier.publish(["all_products", "low_stock", "all_products"])

    assert announced == ["all_products", "low_stock"]
    assert received == [["all_products", "low_stock"]]


def test_failing_subscriber_does_not_block_others():
    notifier = StaleViewNotifier(channel="views")
    received = []

    def broken(views):
        raise RuntimeError("render failed")

    notifier.subscribe(broken)
    notifier.subscribe(received.append)

    notifier.publish(["purchased"])

    assert received == [["purchased"]]


def test_unsubscribe():
    notifier = StaleViewNotifier(channel="views")
    received = []
    notifier.subscribe(received.append)
    notifier.unsubscribe(received.append)

    notifier.publish(["purchased"])

    assert received == []


def test_publishes_json_on_redis_channel():
    client = RecordingRedis()
    notifier = StaleViewNotifier(redis_client=client, channel="store_sync:stale_views")

    notifier.publish(["all_products"])

    channel, message = client.messages[0]
    assert channel == "store_sync:stale_views"
    assert json.loads(message) == {"stale_views": ["all_products"]}


def test_redis_outage_is_swallowed():
    notifier = StaleViewNotifier(redis_client=RecordingRedis(fail=True), channel="views")

    assert notifier.publish(["low_stock"]) == ["low_stock"]


def test_nothing_to_announce():
    client = RecordingRedis()
    notifier = StaleViewNotifier(redis_client=client, channel="views")

    assert notifier.publish([]) == []
    assert client.messages == []
