"""
Test suite for schema creation helpers.

System role: Verification of development schema setup
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from knowledge_rag.boundary.db.create_tables import create_all_tables, drop_all_tables

EXPECTED_TABLES = {
    "sources",
    "knowledge_jobs",
    "knowledge_items",
    "knowledge_chunks",
    "knowledge_embeddings",
    "knowledge_queries",
    "knowledge_query_results",
}


async def _table_names(engine) -> set[str]:
    async with engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


class TestCreateTables:
    """Test suite for create_all_tables() and drop_all_tables()."""

    @pytest.mark.asyncio
    async def test_create_should_be_idempotent_and_drop_should_clear(self, tmp_path) -> None:
        # Arrange
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}")

        try:
            # Act
            await create_all_tables(engine)
            await create_all_tables(engine)
            created = await _table_names(engine)
            await drop_all_tables(engine)
            dropped = await _table_names(engine)
        finally:
            await engine.dispose()

        # Assert
        assert EXPECTED_TABLES <= created
        assert dropped == set()
