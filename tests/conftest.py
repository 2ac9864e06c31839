"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import store_sync.models  # noqa: F401
from store_sync.core.config import WooCommerceConfig
from store_sync.db.base import Base
from store_sync.services.view_events import StaleViewNotifier, set_notifier
from store_sync.services.woocommerce.client import CatalogClient
from tests.fakes import FakeWCAPI


@pytest.fixture
def db():
    """Fresh in-memory SQLite session per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def wcapi() -> FakeWCAPI:
    return FakeWCAPI()


@pytest.fixture
def client(wcapi: FakeWCAPI) -> CatalogClient:
    config = WooCommerceConfig(url="https://shop.test", consumer_key="ck_test", consumer_secret="cs_test")
    return CatalogClient(config, wcapi=wcapi, per_page=100)


@pytest.fixture
def stale_views():
    """Views announced during the test, in order."""
    return []


@pytest.fixture(autouse=True)
def notifier(stale_views):
    """In-process notifier (no Redis) installed as the process-wide one."""
    notifier = StaleViewNotifier(redis_client=None, channel="test:stale_views")
    notifier.subscribe(stale_views.append)
    set_notifier(notifier)
    yield notifier
    set_notifier(None)
