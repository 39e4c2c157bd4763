"""Application document <-> BSON document mapping (Decimal, UUID, models)."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Generic, TypeVar
from uuid import UUID

from bson import Decimal128
from pydantic import BaseModel, ValidationError

from .exceptions import DocumentMappingError

TModel = TypeVar("TModel", bound=BaseModel)


def to_bson(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, Mapping):
        return {k: to_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_bson(v) for v in value]
    return value


def from_bson(value: Any) -> Any:
    """Convert BSON types back to Python types."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, Mapping):
        return {k: from_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_bson(v) for v in value]
    return value


class ModelMapper(Generic[TModel]):
    """
    Application document mapper.

    Without a model, documents are plain dicts. With a pydantic model,
    ``dump`` uses ``model_dump(mode='python')`` (dropping unset ``None``
    identifiers) and ``load`` validates into the model.
    """

    def __init__(
        self, model: type[TModel] | None = None, *, id_field: str = "id"
    ) -> None:
        self.model = model
        self._id_field = id_field

    def dump(self, document: TModel | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(document, BaseModel):
            data = document.model_dump(mode="python")
            if data.get(self._id_field) is None:
                data.pop(self._id_field, None)
            return data
        return dict(document)

    def load(self, data: dict[str, Any]) -> TModel | dict[str, Any]:
        if self.model is None:
            return data
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise DocumentMappingError(str(e)) from e
