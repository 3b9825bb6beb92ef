from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import psycopg
from psycopg_pool import AsyncConnectionPool

from app.config.settings import Settings


def build_conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


class Database:
    """Owns the async connection pool shared by the repositories."""

    def __init__(self, conninfo: str, max_size: int = 20) -> None:
        self._pool = AsyncConnectionPool(
            conninfo, min_size=1, max_size=max_size, open=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_conninfo(settings), max_size=settings.db_max_connections)

    async def open(self) -> None:
        await self._pool.open(wait=True)

    async def close(self) -> None:
        await self._pool.close()

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection[Any], None]:
        """Yield a pooled connection. Commits on clean exit, rolls back on error."""
        async with self._pool.connection() as conn:
            yield conn
