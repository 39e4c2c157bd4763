"""MongoDB document store with portable base64url identifiers.

Translates application documents, filters and updates into MongoDB's native
shapes (ObjectId keys, ``$set``/``$unset``/``$push`` operators) around a
Motor collection.
"""

from __future__ import annotations

from .codec import SUPPORTED_LENGTHS, IdentifierCodec
from .collection import Collection
from .connection import MongoConnectionManager
from .exceptions import (
    DocumentMappingError,
    DocumentStoreError,
    IdentifierError,
    MongoConnectionError,
    MongoQueryError,
)
from .filter import FilterTranslator
from .identifier import Base64IdentifierGenerator, IdentifierGenerator
from .serialization import ModelMapper
from .update import UpdateBuilder

__all__ = [
    # Core
    "Collection",
    "MongoConnectionManager",
    # Translation
    "IdentifierCodec",
    "SUPPORTED_LENGTHS",
    "FilterTranslator",
    "UpdateBuilder",
    "ModelMapper",
    # Identifiers
    "IdentifierGenerator",
    "Base64IdentifierGenerator",
    # Exceptions
    "DocumentStoreError",
    "IdentifierError",
    "DocumentMappingError",
    "MongoConnectionError",
    "MongoQueryError",
]
