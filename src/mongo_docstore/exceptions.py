"""Document store exceptions."""

from __future__ import annotations


class DocumentStoreError(Exception):
    """Root exception for mongo-docstore."""


class IdentifierError(DocumentStoreError, ValueError):
    """Raised when an identifier cannot be decoded."""


class DocumentMappingError(DocumentStoreError):
    """Raised when a stored document cannot be mapped to the application model."""


class MongoConnectionError(DocumentStoreError):
    """Raised when connection to MongoDB fails."""


class MongoQueryError(DocumentStoreError):
    """Raised when a query or update cannot be built from the given input."""
