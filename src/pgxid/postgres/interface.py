from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from pgxid.base.interface import BaseInterface
from pgxid.recovery import recover_async
from pgxid.xid import Xid


class PostgresPool(BaseInterface):
    """Interface for connecting to a Postgres database"""

    scheme = "postgres"

    def _setup_pool(self):
        self._pool = AsyncConnectionPool(
            self.full_dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            open=False,
        )

    async def open(self):
        """Open connections to the pool"""
        await self._pool.open()

    async def close(self):
        """Close connections to the pool"""
        await self._pool.close()

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, *args):
        await self.close()

    @asynccontextmanager
    async def connection(
        self, timeout: Optional[float] = None
    ) -> AsyncIterator[AsyncConnection]:
        """Obtain a connection to the database

        Args:
            timeout (float, optional): Time before an error is raised on
                failure to connect. Defaults to `None`.

        Yields:
            AsyncConnection: A database connection
        """
        async with self._pool.connection(timeout=timeout) as conn:
            yield conn

    async def recover(self, timeout: Optional[float] = None) -> List[Xid]:
        """List the transactions currently prepared on the database

        Example:

        ```python
        async with PostgresPool(dsn) as pool:
            for xid in await pool.recover():
                print(xid.format_id, xid.gtrid, xid.owner, xid.prepared)
        ```

        Args:
            timeout (float, optional): Time before an error is raised on
                failure to obtain a connection. Defaults to `None`.

        Returns:
            List[Xid]: The recovered transaction identifiers
        """
        async with self.connection(timeout=timeout) as conn:
            return await recover_async(conn)
