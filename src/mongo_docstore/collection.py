"""Collection: application-level CRUD over a Motor collection."""

from __future__ import annotations

import asyncio
import builtins
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel
from pymongo import ReturnDocument

from .codec import IdentifierCodec
from .exceptions import MongoQueryError
from .filter import FilterTranslator
from .identifier import Base64IdentifierGenerator
from .serialization import ModelMapper, from_bson, to_bson
from .update import to_native as update_to_native

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Document = dict[str, Any]


class Collection(Generic[T]):
    """
    Typed CRUD surface over a MongoDB collection.

    Documents are exposed with a base64url identifier under ``id_field``;
    stored documents are keyed by the matching ObjectId under ``_id``.

    Args:
        backend: The Motor collection handle.
        shard: Optional shard key field. When set, bulk updates not constrained
            by it are issued once per distinct shard value.
        id_length: Identifier length in base64url characters (4, 8, 12 or 16).
        model: Optional pydantic model; documents are then returned as model
            instances and model instances are accepted as input.
        id_field: Name of the application identifier field.
    """

    def __init__(
        self,
        backend: AsyncIOMotorCollection[Any],
        *,
        shard: str | None = None,
        id_length: int = 16,
        model: type[T] | None = None,
        id_field: str = "id",
    ) -> None:
        self._backend = backend
        self.shard = shard
        self.codec = IdentifierCodec(id_length)
        self._id_field = id_field
        self._filters = FilterTranslator(self.codec, id_field=id_field)
        self._mapper: ModelMapper[T] = ModelMapper(model, id_field=id_field)
        self._generator = Base64IdentifierGenerator(id_length)

    @property
    def id_length(self) -> int:
        return self.codec.length

    async def get(self, filter: Mapping[str, Any] | T) -> T | Document | None:
        """Return the first document matching ``filter``, or None."""
        native = await self._backend.find_one(self._to_filter(filter))
        return self._to_document(native)

    async def list(
        self, filter: Mapping[str, Any] | T | None = None
    ) -> builtins.list[T | Document]:
        """Return every document matching ``filter`` (all when omitted)."""
        cursor = self._backend.find(self._to_filter(filter))
        return [self._to_document(doc) async for doc in cursor]

    async def create_one(self, document: Mapping[str, Any] | T) -> T | Document:
        """Insert ``document`` and return it as stored."""
        result = await self._backend.insert_one(self._to_insert(document))
        return self._to_document(
            await self._backend.find_one({"_id": result.inserted_id})
        )

    async def create_many(
        self, documents: Sequence[Mapping[str, Any] | T]
    ) -> builtins.list[T | Document]:
        """Insert ``documents`` and return them as stored."""
        if not documents:
            return []
        result = await self._backend.insert_many(
            [self._to_insert(document) for document in documents]
        )
        cursor = self._backend.find({"_id": {"$in": list(result.inserted_ids)}})
        return [self._to_document(doc) async for doc in cursor]

    async def update_one(
        self, changes: Mapping[str, Any] | T
    ) -> T | Document | None:
        """Atomically update the document identified by ``changes[id_field]``.

        Returns the updated document, or None when nothing matched.
        """
        filter, update = self._split(self._mapper.dump(changes))
        if "_id" not in filter:
            raise MongoQueryError(
                f"update_one requires an identifier in field {self._id_field!r}"
            )
        if not update:
            return self._to_document(await self._backend.find_one(filter))
        updated = await self._backend.find_one_and_update(
            filter, update, return_document=ReturnDocument.AFTER
        )
        return self._to_document(updated)

    async def update_many(self, changes: Mapping[str, Any] | T) -> int:
        """Update every document matching the identifier and shard fields of
        ``changes``; returns the number of documents updated.
        """
        filter, update = self._split(self._mapper.dump(changes))
        if not update:
            return 0
        shard = self.shard
        if shard and shard not in filter:
            # Sharded stores may reject an update_many spanning several shards.
            values = await self._backend.distinct(shard, filter)
            logger.debug(
                "Updating across %d values of shard %r", len(values), shard
            )
            results = await asyncio.gather(
                *(
                    self._backend.update_many({**filter, shard: value}, update)
                    for value in values
                )
            )
            return sum(result.matched_count for result in results)
        result = await self._backend.update_many(filter, update)
        return int(result.modified_count)

    async def update_each(
        self, changes: Sequence[Mapping[str, Any] | T]
    ) -> builtins.list[T | Document]:
        """Apply ``update_one`` to every entry concurrently.

        Entries that fail or match nothing are left out of the result.
        """
        results = await asyncio.gather(
            *(self.update_one(entry) for entry in changes), return_exceptions=True
        )
        updated: builtins.list[T | Document] = []
        for entry, result in zip(changes, results):
            if isinstance(result, BaseException):
                logger.warning("Skipping failed update of %r: %s", entry, result)
            elif result is not None:
                updated.append(result)
        return updated

    def _split(self, changes: Mapping[str, Any]) -> tuple[Document, Document]:
        filter = to_bson(self._filters.select(changes, self.shard))
        update = to_bson(update_to_native(changes, self._id_field, self.shard))
        logger.debug("Update filter %r, update %r", filter, update)
        return filter, update

    def _to_filter(self, filter: Mapping[str, Any] | T | None) -> Document:
        if filter is None:
            return {}
        return to_bson(self._filters.to_native(self._mapper.dump(filter)))

    def _to_insert(self, document: Mapping[str, Any] | T) -> Document:
        data = self._mapper.dump(document)
        # Keys shorter than an ObjectId cannot be read back from store-assigned ids.
        if self.id_length < 16 and not data.get(self._id_field):
            data[self._id_field] = self._generator.next_id()
        return to_bson(self._filters.to_native(data))

    def _to_document(self, native: Mapping[str, Any] | None) -> Any:
        if native is None:
            return None
        data = {k: from_bson(v) for k, v in native.items() if k != "_id"}
        data[self._id_field] = self.codec.decode(native["_id"])
        return self._mapper.load(data)
