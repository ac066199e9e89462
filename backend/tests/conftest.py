"""Shared fixtures: in-memory SQLite store, pinned clock, API client."""

import os

# Must be set before freshtrack.config is first imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["RECIPE_GENERATOR"] = "heuristic"
os.environ["CIVIL_TIMEZONE"] = "UTC"

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import freshtrack.models  # noqa: F401 - register tables on Base.metadata
from freshtrack.database import Base, get_db
from freshtrack.schemas.food_item import FoodItemResponse
from freshtrack.store import SqlInventoryStore
from freshtrack.utils.deps import get_now

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return SqlInventoryStore(db)


@pytest.fixture
def owner():
    return uuid4()


@pytest.fixture
def headers(owner):
    return {"X-Owner-Id": str(owner)}


@pytest.fixture
def client(engine):
    from freshtrack.main import app

    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_item(owner):
    """Build an in-memory food item expiring `offset` days after TODAY."""

    def _make(name="Milk", offset=0, consumed=False, quantity=1.0, unit="liter", **kwargs):
        return FoodItemResponse(
            id=kwargs.pop("id", uuid4()),
            owner_id=kwargs.pop("owner_id", owner),
            name=name,
            quantity=quantity,
            unit=unit,
            category=kwargs.pop("category", None),
            expiry_date=TODAY + timedelta(days=offset),
            receipt_ref=kwargs.pop("receipt_ref", None),
            consumed=consumed,
            created_at=NOW,
        )

    return _make
