"""Filter translation: application filters -> MongoDB filter documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .codec import IdentifierCodec


class FilterTranslator:
    """Substitute the ObjectId key for the application identifier field."""

    def __init__(self, codec: IdentifierCodec, *, id_field: str = "id") -> None:
        self._codec = codec
        self._id_field = id_field

    def to_native(self, filter: Mapping[str, Any] | None) -> dict[str, Any]:
        """Build a MongoDB filter; ``None`` or empty matches every document."""
        if not filter:
            return {}
        result = dict(filter)
        value = result.pop(self._id_field, None)
        if value:
            result["_id"] = self._codec.encode(value)
        return result

    def select(
        self, document: Mapping[str, Any], *fields: str | None
    ) -> dict[str, Any]:
        """Build a filter from the identifier and ``fields`` of an update document.

        An empty identifier and absent or ``None`` fields are skipped; falsy
        values such as ``0`` or ``""`` still constrain their field.
        """
        selected = {
            name: document[name]
            for name in fields
            if name and document.get(name) is not None
        }
        if document.get(self._id_field):
            selected[self._id_field] = document[self._id_field]
        return self.to_native(selected)
