"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Gateway credentials are fakes; no test reaches a real provider
    - RecordingBroadcaster stands in for ChangeBroadcaster wherever a test
      only needs to know what was published

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for writer and
      route tests (no PostgreSQL-specific features are used)
"""

import asyncio
import os

# Must be set before storefront.config.get_settings() is first called
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("STRIPE_PUBLISHABLE_KEY", "pk_test_fake")
os.environ.setdefault("RAZORPAY_KEY", "rzp_test_fake")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import storefront.models  # noqa: F401
from storefront.db.base import Base


class RecordingBroadcaster:
    """Collects published ChangeEvents instead of delivering them."""

    def __init__(self):
        self.events = []

    def publish(self, event) -> int:
        self.events.append(event)
        return 0

    def actions(self) -> list[tuple[str, str]]:
        return [(e.entity_type.value, e.action.value) for e in self.events]


async def wait_until(predicate, timeout: float = 1.0) -> None:
    """Yield to the event loop until predicate() holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.001)


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def recorder():
    return RecordingBroadcaster()


@pytest.fixture
def settle():
    """The wait_until helper, for tests that await delivery tasks."""
    return wait_until
