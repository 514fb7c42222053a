"""libSQL storage for the athlete and swim time snapshot.

SnapshotRepository is the only caller. It reads the two tables with
execute() and rewrites them with execute_batch(), which libSQL runs as a
single transaction so a save is never left half applied.

The database is a local SQLite file unless a libsql:// URL and auth token
are configured, in which case the same tables live in a hosted Turso
database.
"""

import logging
from typing import Any

from libsql_client import Client, ResultSet, Statement, create_client

from swimtimes.config import settings

logger = logging.getLogger(__name__)

DEFAULT_URL = "file:swimtimes.db"


class TursoClient:
    """Async connection to the snapshot database."""

    def __init__(
        self,
        url: str | None = None,
        auth_token: str | None = None,
    ):
        """Configure the connection; nothing is opened until connect().

        Args:
            url: Database URL. Defaults to TURSO_DATABASE_URL,
                then to swimtimes.db in the working directory.
            auth_token: Token for a hosted database. Ignored for file URLs.
        """
        self.url = url or settings.turso_database_url or DEFAULT_URL
        self.auth_token = auth_token or settings.turso_auth_token
        self._client: Client | None = None

    @property
    def is_remote(self) -> bool:
        return bool(self.auth_token) and self.url.startswith("libsql://")

    async def connect(self) -> None:
        """Open the connection. Calling it again is a no-op."""
        if self._client is not None:
            return

        if self.is_remote:
            self._client = create_client(url=self.url, auth_token=self.auth_token)
        else:
            self._client = create_client(url=self.url)

        logger.info("Snapshot database opened: %s", self.url)

    async def execute(
        self,
        sql: str,
        params: list[Any] | None = None,
    ) -> ResultSet:
        """Run one statement, typically a snapshot table read.

        Raises:
            RuntimeError: If connect() has not been called
        """
        return await self._connected().execute(sql, params or [])

    async def execute_batch(self, statements: list[str | Statement]) -> None:
        """Run statements as one transaction.

        A snapshot save deletes and reinserts both tables; if any statement
        fails the previous snapshot is left in place.

        Raises:
            RuntimeError: If connect() has not been called
        """
        await self._connected().batch(statements)

    async def close(self) -> None:
        if self._client:
            await self._client.close()
            self._client = None
            logger.info("Snapshot database closed")

    async def is_healthy(self) -> bool:
        """Readiness check used by /health/ready."""
        if not self._client:
            return False
        try:
            result = await self._client.execute("SELECT 1")
        except Exception:
            logger.warning("Snapshot database health check failed", exc_info=True)
            return False
        return len(result.rows) == 1

    def _connected(self) -> Client:
        if self._client is None:
            msg = "Snapshot database not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client
