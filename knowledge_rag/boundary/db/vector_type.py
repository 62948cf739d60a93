"""
Vector column type.

Stores embeddings as a pgvector ``vector(D)`` column on PostgreSQL and as a
JSON array everywhere else (SQLite in tests). Values travel as ``list[float]``
in Python; on PostgreSQL they are sent and read in the pgvector text format
``[x,y,...]``.

Dependencies: sqlalchemy
System role: Embedding storage for similarity search
"""

from typing import Any

from sqlalchemy import JSON
from sqlalchemy.types import TypeDecorator, UserDefinedType


class PgVector(UserDefinedType):
    """Raw pgvector column type, ``vector(D)``."""

    cache_ok = True

    def __init__(self, dimensions: int) -> None:
        self.dimensions = dimensions

    def get_col_spec(self, **kw: Any) -> str:
        return f"vector({self.dimensions})"


def to_pgvector_literal(values: list[float]) -> str:
    """Render a float list as a pgvector text literal."""
    return "[" + ",".join(repr(float(v)) for v in values) + "]"


def from_pgvector_literal(value: str) -> list[float]:
    """Parse a pgvector text literal back into floats."""
    body = value.strip()[1:-1]
    if not body:
        return []
    return [float(part) for part in body.split(",")]


class Vector(TypeDecorator):
    """
    Dialect-aware embedding vector type.

    Attributes:
        dimensions: Fixed vector dimension for the column
    """

    impl = JSON
    cache_ok = True

    def __init__(self, dimensions: int) -> None:
        super().__init__()
        self.dimensions = dimensions

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PgVector(self.dimensions))
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return to_pgvector_literal(value)
        return [float(v) for v in value]

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, str):
            return from_pgvector_literal(value)
        return [float(v) for v in value]
