"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and the transaction
scope every repository call runs inside.

Dependencies: sqlalchemy, knowledge_rag.configs
System role: Database connection lifecycle management
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from knowledge_rag.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create the async engine for the knowledge database.

    PostgreSQL engines get the configured pool and pre-ping; other backends
    (SQLite via url_override) keep SQLAlchemy's default pool for that dialect.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    url = make_url(db_config.async_database_url)
    pool_options = {}
    if url.get_backend_name() == "postgresql":
        pool_options = {
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_timeout": db_config.pool_timeout,
            "pool_pre_ping": True,
        }
    return create_async_engine(url, echo=db_config.echo_sql, **pool_options)


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    autoflush=False and expire_on_commit=False keep ORM instances usable
    after their transaction has committed.

    Args:
        engine: Async engine to bind sessions to

    Returns:
        async_sessionmaker: Async session factory
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


@asynccontextmanager
async def transaction_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Open a fresh session bound to a single transaction.

    Commits when the block exits normally and rolls back when it raises.
    Every scope gets its own session; nothing is shared between scopes.

    Args:
        session_factory: Factory producing AsyncSession instances

    Yields:
        AsyncSession: Session whose transaction is already begun

    Usage:
        async with transaction_scope(session_factory) as session:
            await knowledge_job_crud.create(session, source_id=source.id)
    """
    async with session_factory() as session:
        async with session.begin():
            yield session
