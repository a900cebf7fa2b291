"""Service test fixtures — async DB, stores, fake uploader, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - get_uploader overridden with FakeUploader: no network calls
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from marketplace.core.errors import UploadError
from marketplace.db.base import Base
from marketplace.infrastructure.asset_uploader import get_uploader
from marketplace.infrastructure.database import get_db, DatabaseSessionManager
from marketplace.infrastructure.account_store import SqlAccountStore
from marketplace.infrastructure.offer_store import SqlOfferStore
from marketplace.services.account_directory import AccountDirectory
from marketplace.services.offer_directory import OfferDirectory
import marketplace.infrastructure.database as db_module
import marketplace.models  # noqa: F401
from marketplace.main import app


class FakeUploader:
    """Records uploads; fails every call when `fail` is set."""

    def __init__(self):
        self.calls: list[tuple[bytes, str]] = []
        self.fail = False

    async def upload(self, data: bytes, mime_type: str) -> dict:
        self.calls.append((data, mime_type))
        if self.fail:
            raise UploadError("service unavailable", status_code=503)
        n = len(self.calls)
        return {
            "public_id": f"offers/img{n}",
            "url": f"http://res.example.com/img{n}.jpg",
            "secure_url": f"https://res.example.com/img{n}.jpg",
        }


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
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
def fake_uploader():
    return FakeUploader()


@pytest.fixture
def accounts(test_db):
    return AccountDirectory(SqlAccountStore(test_db))


@pytest.fixture
def offers(test_db, fake_uploader):
    return OfferDirectory(SqlOfferStore(test_db), fake_uploader)


@pytest.fixture
async def client(test_engine, test_session_factory, fake_uploader):
    """FastAPI test client with DB and uploader dependencies overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_uploader] = lambda: fake_uploader

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seller(accounts):
    """A registered account for ownership and auth tests."""
    return await accounts.create("seller@example.com", "Seller", "pw123", False)
