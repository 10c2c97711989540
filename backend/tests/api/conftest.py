"""API test fixtures — FastAPI test client over an in-memory database.

Invariants:
    - get_db is overridden to the test session factory
    - get_broadcaster is overridden to the RecordingBroadcaster, so tests assert
      exactly which ChangeEvents a request published
    - db_manager is patched for the readiness probe, which bypasses get_db
"""

import pytest
from httpx import ASGITransport, AsyncClient

import storefront.infrastructure.database as db_module
from storefront.api.dependencies import get_broadcaster
from storefront.infrastructure.database import DatabaseSessionManager, get_db
from storefront.main import app


@pytest.fixture
async def client(test_engine, test_session_factory, recorder):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: recorder

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
