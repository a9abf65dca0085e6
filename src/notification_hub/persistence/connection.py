"""MongoConnectionManager: Motor client lifecycle, database handle, health check."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import StoreConnectionError
from .indexes import ensure_indexes

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

    from ..config import DatabaseSettings


class MongoConnectionManager:
    """Wrap the Motor client and the notification database it serves."""

    def __init__(
        self,
        url: str = "mongodb://localhost:27017/notification-service",
        *,
        database: str = "notification-service",
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
    ) -> None:
        self._url = url
        self._database = database
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._connect_timeout_ms = connect_timeout_ms
        self._client: AsyncIOMotorClient[Any] | None = None

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> MongoConnectionManager:
        return cls(
            settings.uri,
            database=settings.name,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
            connect_timeout_ms=settings.connect_timeout_ms,
        )

    async def connect(self) -> AsyncIOMotorClient[Any]:
        """Create and cache the Motor client. Idempotent."""
        if self._client is not None:
            return self._client
        from motor.motor_asyncio import AsyncIOMotorClient

        try:
            self._client = AsyncIOMotorClient(
                self._url,
                serverSelectionTimeoutMS=self._server_selection_timeout_ms,
                connectTimeoutMS=self._connect_timeout_ms,
            )
            return self._client
        except Exception as e:
            raise StoreConnectionError(str(e)) from e

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        """Return the Motor client; raises if not connected."""
        if self._client is None:
            raise StoreConnectionError("Not connected; call connect() first")
        return self._client

    @property
    def database_name(self) -> str:
        return self._database

    @property
    def database(self) -> AsyncIOMotorDatabase[Any]:
        return self.client.get_database(self._database)

    async def initialize(self) -> list[str]:
        """Connect and create the subscription, template and log indexes."""
        await self.connect()
        return await ensure_indexes(self)

    def close(self) -> None:
        """Close the client (Motor's close() is synchronous)."""
        if self._client is not None:
            self._client.close()
            self._client = None

    async def health_check(self) -> bool:
        """Ping the server; return True if reachable."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception:  # noqa: BLE001
            return False
