"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite async databases, a deterministic fake embedding client,
local file storage, wired services
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from helpers import FakeEmbeddingClient
from knowledge_rag.boundary.db.base import Base
from knowledge_rag.boundary.storage.local_accessor import LocalFileAccessor

# Import all models to register them with Base.metadata
import knowledge_rag.boundary.db.models  # noqa: F401


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def _create_engine(url: str, **kwargs):
    engine = create_async_engine(url, **kwargs)
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.fixture
async def async_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection (StaticPool)
    """
    engine = await _create_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """
    Create file-backed SQLite async engine, one connection per session.

    Needed where two transactions must run on separate connections.
    """
    engine = await _create_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'knowledge.db'}",
        poolclass=NullPool,
    )
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory engine."""
    return async_sessionmaker(async_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Provide a session for direct CRUD tests.

    Yields:
        AsyncSession: Session rolled back after the test
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fake_embedding_client() -> FakeEmbeddingClient:
    """Deterministic embedding client with 8-dimensional vectors."""
    return FakeEmbeddingClient()


@pytest.fixture
def local_accessor(tmp_path) -> LocalFileAccessor:
    """Local file accessor rooted in a per-test directory."""
    return LocalFileAccessor(tmp_path / "uploads")


@pytest.fixture
def container(async_engine, fake_embedding_client, local_accessor):
    """Services wired by the composition root against the test database."""
    from knowledge_rag.dependencies import build_container

    return build_container(
        engine=async_engine,
        embedding_client=fake_embedding_client,
        file_accessor=local_accessor,
    )


@pytest.fixture
def two_thousand_char_text() -> str:
    """Plain prose, exactly 2000 characters, no sentence punctuation."""
    text = ("alpha beta gamma delta " * 100)[:2000]
    assert len(text) == 2000
    return text
