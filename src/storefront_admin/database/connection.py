"""
Database connection management using asyncpg.

Every driver failure is surfaced as ``DatabaseError`` (or ``ConflictError``
for unique violations). Nothing here retries.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional
import logging

import asyncpg
from asyncpg import Connection, Pool, Record

from ..core.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@asynccontextmanager
async def _translate_errors(operation: str) -> AsyncIterator[None]:
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise ConflictError(
            "Resource already exists",
            details={"constraint": getattr(e, "constraint_name", None)},
        ) from e
    except _DRIVER_ERRORS as e:
        logger.error(f"Database {operation} failed: {e}")
        raise DatabaseError(f"Database {operation} failed: {e}") from e


class DatabaseManager:
    """Manages the asyncpg pool and hands out connections and transactions."""

    def __init__(self, dsn: str, application_name: str = "storefront-admin", **pool_config):
        self.pool: Optional[Pool] = None
        self.dsn = dsn.replace("+asyncpg", "") if dsn else dsn
        self.application_name = application_name
        self.pool_config = {
            "min_size": 2,
            "max_size": 10,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 30,
            **pool_config
        }

    async def connect(self) -> Pool:
        """Create the connection pool if it does not exist yet."""
        if self.pool is None:
            logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
            async with _translate_errors("connect"):
                self.pool = await asyncpg.create_pool(
                    self.dsn,
                    server_settings={"application_name": self.application_name},
                    **self.pool_config
                )
            logger.info("Database pool created successfully")
        return self.pool

    async def close(self) -> None:
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[Connection]:
        """Acquire a connection from the pool."""
        pool = await self.connect()
        async with _translate_errors("query"):
            async with pool.acquire() as connection:
                yield connection

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Connection]:
        """Acquire a connection wrapped in an all-or-nothing transaction."""
        async with self.connection() as connection:
            async with _translate_errors("transaction"):
                async with connection.transaction():
                    yield connection

    async def execute(self, query: str, *args) -> str:
        async with self.connection() as connection:
            return await connection.execute(query, *args)

    async def fetch(self, query: str, *args) -> List[Record]:
        async with self.connection() as connection:
            return await connection.fetch(query, *args)

    async def fetchrow(self, query: str, *args) -> Optional[Record]:
        async with self.connection() as connection:
            return await connection.fetchrow(query, *args)

    async def fetchval(self, query: str, *args, column: int = 0) -> Any:
        async with self.connection() as connection:
            return await connection.fetchval(query, *args, column=column)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            return await self.fetchval("SELECT 1") == 1
        except DatabaseError as e:
            logger.error(f"Database health check failed: {e}")
            return False


def parse_command_count(status: str) -> int:
    """Extract the row count from an asyncpg command status such as ``DELETE 3``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0
