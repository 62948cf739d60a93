"""
Relational store configuration.

Connection parts for the PostgreSQL (pgvector) database that holds sources,
jobs, knowledge items and query history. ``url_override`` accepts any async
SQLAlchemy URL, which is how local runs point at SQLite.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from knowledge_rag.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool settings for the knowledge database."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: SecretStr = Field(default=SecretStr("postgres"))
    db: str = Field(default="knowledge", description="Database holding the knowledge tables")
    sslmode: str = Field(default="disable", description="'require' for managed databases")

    # Pool sizing only applies to PostgreSQL engines
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False)

    url_override: str = Field(
        default="",
        description="Full async SQLAlchemy URL used instead of the parts above",
    )

    @property
    def async_database_url(self) -> str:
        """
        Async SQLAlchemy URL for the knowledge database.

        Credentials are escaped, so passwords may contain URL metacharacters.
        asyncpg takes ``ssl`` rather than libpq's ``sslmode``.
        """
        if self.url_override:
            return self.url_override
        url = URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.sslmode == "require" else {},
        )
        return url.render_as_string(hide_password=False)
