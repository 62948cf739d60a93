"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata. On
PostgreSQL the pgvector extension is created first so the embedding column
type resolves.

Dependencies: sqlalchemy, knowledge_rag.configs
System role: Database schema initialization (development only)

Usage:
    python -m knowledge_rag.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from knowledge_rag.boundary.db.base import Base
from knowledge_rag.boundary.db.connection import get_async_engine
from knowledge_rag.configs import get_settings
from knowledge_rag.observability.logger import configure_logging

# Import all models to register them with Base.metadata
import knowledge_rag.boundary.db.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: CREATE EXTENSION / CREATE TABLE IF NOT EXISTS, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Async engine to create the schema on

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created")


async def drop_all_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Async engine to drop the schema from
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - Tables dropped")


async def _main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    engine = get_async_engine(settings.database)
    try:
        await create_all_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
