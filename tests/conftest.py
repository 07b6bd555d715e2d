# tests/conftest.py
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cloudhire.core.config import settings
from cloudhire.db.memory import InMemoryRecordStore
from cloudhire.db.store import set_store
from cloudhire.main import app


@pytest.fixture(autouse=True)
def memory_store():
    """Every test gets a fresh in-memory store behind get_store()."""
    store = InMemoryRecordStore()
    set_store(store)
    yield store
    set_store(None)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    # tests that need auth or strict create switch these on explicitly
    monkeypatch.setattr(settings, "AUTH_REQUIRED", False)
    monkeypatch.setattr(settings, "STRICT_CREATE", False)
    monkeypatch.setattr(settings, "TABLE_KEY_ATTRIBUTE", "id")
    monkeypatch.setattr(settings, "SECRET_KEY", "test-secret")


@pytest_asyncio.fixture
async def api_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
