"""
Knowledge embedding CRUD operations and nearest-neighbour search.

On PostgreSQL the ranking is pushed down to pgvector's cosine distance
operator ``<=>``. Other dialects store vectors as JSON, so the same cosine
distance is computed with numpy over the stored rows.

Dependencies: sqlalchemy, numpy, knowledge_rag.boundary.db.models
System role: Embedding persistence and similarity ranking
"""

import math
from dataclasses import dataclass
from uuid import UUID

import numpy as np
from sqlalchemy import Float, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_rag.boundary.db.models.knowledge_model import (
    KnowledgeChunkModel,
    KnowledgeEmbeddingModel,
)
from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD


@dataclass(frozen=True)
class NearestChunk:
    """A ranked chunk row: id, text and cosine distance to the query."""

    chunk_id: UUID
    text: str
    distance: float


def cosine_distance(query: np.ndarray, candidate: np.ndarray) -> float:
    """
    Cosine distance ``1 - cos(a, b)``, matching pgvector's ``<=>``.

    A zero-norm operand yields NaN, as pgvector does.
    """
    denominator = float(np.linalg.norm(query) * np.linalg.norm(candidate))
    if denominator == 0.0:
        return math.nan
    return 1.0 - float(np.dot(query, candidate)) / denominator


def _ranking_key(row: NearestChunk) -> tuple[bool, float, str]:
    # NaN sorts after every number, like PostgreSQL.
    is_nan = math.isnan(row.distance)
    return (is_nan, 0.0 if is_nan else row.distance, str(row.chunk_id))


class KnowledgeEmbeddingCRUD(BaseCRUD[KnowledgeEmbeddingModel]):
    """CRUD operations for KnowledgeEmbeddingModel."""

    def __init__(self) -> None:
        """Initialize KnowledgeEmbeddingCRUD with KnowledgeEmbeddingModel."""
        super().__init__(KnowledgeEmbeddingModel)

    async def find_nearest(
        self,
        session: AsyncSession,
        vector: list[float],
        limit: int,
    ) -> list[NearestChunk]:
        """
        Rank stored chunks by cosine distance to a query vector.

        Ties on distance are broken by chunk id so the ranking is
        deterministic for a fixed corpus.

        Args:
            session: Async database session
            vector: Query embedding
            limit: Maximum number of chunks to return

        Returns:
            Up to ``limit`` NearestChunk rows, closest first
        """
        if session.get_bind().dialect.name == "postgresql":
            return await self._find_nearest_pgvector(session, vector, limit)
        return await self._find_nearest_in_memory(session, vector, limit)

    async def _find_nearest_pgvector(
        self,
        session: AsyncSession,
        vector: list[float],
        limit: int,
    ) -> list[NearestChunk]:
        distance = KnowledgeEmbeddingModel.embedding.op("<=>", return_type=Float)(
            vector
        )
        stmt = (
            select(
                KnowledgeChunkModel.id,
                KnowledgeChunkModel.text,
                distance.label("distance"),
            )
            .join(
                KnowledgeEmbeddingModel,
                KnowledgeEmbeddingModel.knowledge_chunk_id == KnowledgeChunkModel.id,
            )
            .order_by(distance, KnowledgeChunkModel.id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [
            NearestChunk(chunk_id=row.id, text=row.text, distance=float(row.distance))
            for row in result.all()
        ]

    async def _find_nearest_in_memory(
        self,
        session: AsyncSession,
        vector: list[float],
        limit: int,
    ) -> list[NearestChunk]:
        stmt = select(
            KnowledgeChunkModel.id,
            KnowledgeChunkModel.text,
            KnowledgeEmbeddingModel.embedding,
        ).join(
            KnowledgeEmbeddingModel,
            KnowledgeEmbeddingModel.knowledge_chunk_id == KnowledgeChunkModel.id,
        )
        result = await session.execute(stmt)

        query = np.asarray(vector, dtype=np.float64)
        rows = [
            NearestChunk(
                chunk_id=row.id,
                text=row.text,
                distance=cosine_distance(
                    query, np.asarray(row.embedding, dtype=np.float64)
                ),
            )
            for row in result.all()
        ]
        rows.sort(key=_ranking_key)
        return rows[:limit]


knowledge_embedding_crud = KnowledgeEmbeddingCRUD()
