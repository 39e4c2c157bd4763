"""Unit tests for BSON value conversion and model mapping."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from bson import Decimal128
from pydantic import BaseModel

from mongo_docstore.exceptions import DocumentMappingError
from mongo_docstore.serialization import ModelMapper, from_bson, to_bson


class SampleModel(BaseModel):
    id: str | None = None
    name: str
    amount: Decimal = Decimal("0")


def test_to_bson_converts_nested_decimals() -> None:
    doc = to_bson({"a": Decimal("1.5"), "b": [Decimal("2")], "c": {"d": Decimal("3")}})
    assert doc == {
        "a": Decimal128("1.5"),
        "b": [Decimal128("2")],
        "c": {"d": Decimal128("3")},
    }


def test_from_bson_restores_decimals() -> None:
    doc = from_bson({"a": Decimal128("1.5"), "b": [{"c": Decimal128("2")}]})
    assert doc == {"a": Decimal("1.5"), "b": [{"c": Decimal("2")}]}


def test_other_values_untouched() -> None:
    assert to_bson({"a": 1, "b": "x", "c": None}) == {"a": 1, "b": "x", "c": None}


def test_mapper_without_model_uses_dicts() -> None:
    mapper = ModelMapper()
    assert mapper.dump({"name": "x"}) == {"name": "x"}
    assert mapper.load({"id": "abcd", "name": "x"}) == {"id": "abcd", "name": "x"}


def test_mapper_dumps_model_and_drops_missing_id() -> None:
    mapper = ModelMapper(SampleModel)
    assert mapper.dump(SampleModel(name="x")) == {"name": "x", "amount": Decimal("0")}
    assert mapper.dump(SampleModel(id="abcd", name="x"))["id"] == "abcd"


def test_mapper_loads_model() -> None:
    mapper = ModelMapper(SampleModel)
    model = mapper.load({"id": "abcd", "name": "x", "amount": Decimal("2.5")})
    assert isinstance(model, SampleModel)
    assert model.amount == Decimal("2.5")


def test_mapper_load_failure() -> None:
    mapper = ModelMapper(SampleModel)
    with pytest.raises(DocumentMappingError):
        mapper.load({"id": "abcd"})


def test_to_bson_stores_uuid_as_string() -> None:
    ref = uuid4()
    assert to_bson({"ref": ref, "refs": [ref]}) == {"ref": str(ref), "refs": [str(ref)]}
