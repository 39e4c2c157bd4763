"""MongoConnectionManager: Motor client lifecycle and collection lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .collection import Collection
from .exceptions import MongoConnectionError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient
    from pydantic import BaseModel

logger = logging.getLogger(__name__)


class MongoConnectionManager:
    """Wrap Motor client with lifecycle and collection helpers."""

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        *,
        database: str | None = None,
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        **kwargs: Any,
    ) -> None:
        self._url = url
        self._database = database
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._connect_timeout_ms = connect_timeout_ms
        self._kwargs = kwargs
        self._client: AsyncIOMotorClient[Any] | None = None

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
                **self._kwargs,
            )
        except Exception as e:
            raise MongoConnectionError(str(e)) from e
        logger.debug("Created Motor client for %s", self._url)
        return self._client

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        """Return the Motor client; raises if not connected."""
        if self._client is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._client

    def close(self) -> None:
        """Close the client (synchronous; Motor client.close() is sync)."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def collection(
        self,
        name: str,
        *,
        database: str | None = None,
        shard: str | None = None,
        id_length: int = 16,
        model: type[BaseModel] | None = None,
    ) -> Collection[Any]:
        """Return a :class:`Collection` over ``database.name``."""
        database_name = database or self._database
        if not database_name:
            raise MongoConnectionError(
                "Database name must be set on the call or the connection"
            )
        backend = self.client.get_database(database_name).get_collection(name)
        return Collection(backend, shard=shard, id_length=id_length, model=model)
