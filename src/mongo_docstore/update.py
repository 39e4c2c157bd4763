"""Update translation: application updates -> MongoDB update operators.

An update document maps field names to one of:

* a plain value, assigned with ``$set``;
* a nested mapping, flattened to dotted paths and assigned per leaf;
* ``{"$set": value}``, assigning ``value`` as-is even if it is a mapping;
* ``{"$unset": True}``, removing the field;
* ``{"$push": value}`` or ``{"$push": [values]}``, appending to an array.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

SET = "$set"
UNSET = "$unset"
PUSH = "$push"

_MARKERS = frozenset((SET, UNSET, PUSH))


class UpdateBuilder:
    """Accumulate update operations and serialise them to MongoDB operators."""

    def __init__(self) -> None:
        self._set: list[tuple[str, Any]] = []
        self._unset: list[str] = []
        self._push: list[tuple[str, list[Any]]] = []

    def set(self, path: str, value: Any) -> UpdateBuilder:
        self._set.append((path, value))
        return self

    def unset(self, path: str) -> UpdateBuilder:
        self._unset.append(path)
        return self

    def push(self, path: str, values: Any) -> UpdateBuilder:
        """Append ``values`` to the array at ``path``; a single value is wrapped."""
        items = list(values) if isinstance(values, (list, tuple)) else [values]
        self._push.append((path, items))
        return self

    def __bool__(self) -> bool:
        return bool(self._set or self._unset or self._push)

    def build(self) -> dict[str, Any]:
        """Return the update document, omitting empty operator buckets."""
        result: dict[str, Any] = {}
        if self._set:
            result[SET] = dict(self._set)
        if self._unset:
            result[UNSET] = dict.fromkeys(self._unset, True)
        if self._push:
            result[PUSH] = {path: {"$each": items} for path, items in self._push}
        return result


def _marker(value: Any) -> str | None:
    if isinstance(value, Mapping) and len(value) == 1:
        (key,) = value
        if key in _MARKERS:
            return key
    return None


def _collect(builder: UpdateBuilder, path: str, value: Any) -> None:
    marker = _marker(value)
    if marker == UNSET:
        builder.unset(path)
    elif marker == PUSH:
        builder.push(path, value[PUSH])
    elif marker == SET:
        builder.set(path, value[SET])
    elif isinstance(value, Mapping) and value:
        for key, child in value.items():
            _collect(builder, f"{path}.{key}", child)
    else:
        builder.set(path, dict(value) if isinstance(value, Mapping) else value)


def to_builder(update: Mapping[str, Any], *exclude: str | None) -> UpdateBuilder:
    """Walk ``update`` into a builder, skipping the fields in ``exclude``."""
    skip = {field for field in exclude if field}
    builder = UpdateBuilder()
    for field, value in update.items():
        if field not in skip:
            _collect(builder, field, value)
    return builder


def to_native(update: Mapping[str, Any], *exclude: str | None) -> dict[str, Any]:
    """Translate ``update`` into a MongoDB update document.

    ``exclude`` names fields consumed by the filter (identifier, shard key).
    """
    result = to_builder(update, *exclude).build()
    logger.debug("Translated update %r -> %r", update, result)
    return result
