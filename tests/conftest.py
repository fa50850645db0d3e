"""Shared fixtures: in-memory SQLite storage and a loaded product store."""

import os
import tempfile
from datetime import date

# Keep the default data directory out of the working tree during tests
os.environ.setdefault("INVENTORY_DATA_DIR", tempfile.mkdtemp(prefix="inventory-test-"))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.models import ProductRecord, init_db
from src.services import ProductStore, SqlBlobStorage

TODAY = date(2026, 1, 15)


def _make_record(name="Milk", category="Dairy", cost_price=10, sell_price=20, discount=10, **extra):
    """Build a valid ProductRecord with sensible defaults."""
    return ProductRecord(
        name=name,
        category=category,
        cost_price=cost_price,
        sell_price=sell_price,
        discount=discount,
        **extra,
    )


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def engine():
    """Fresh in-memory database shared across sessions of one test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def storage(session_factory):
    return SqlBlobStorage(session_factory=session_factory)


@pytest.fixture
def store(storage):
    product_store = ProductStore(storage, page_size=10)
    product_store.load()
    return product_store
