from __future__ import annotations

from types import MappingProxyType, SimpleNamespace
from typing import Any, Dict, List, Mapping, Optional

from .errors import (
    ArrayItemError,
    MissingRequiredPropertyError,
    PropertyError,
    SchemaError,
    TypeMismatchError,
    ValidationFailedError,
)
from .json_utils import encode_json
from .types import Schema, json_kind

__all__ = [
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "ArraySchema",
    "ObjectSchema",
    "string",
    "number",
    "boolean",
    "array",
    "obj",
    "s",
]


class _PrimitiveSchema(Schema[Any]):
    """Leaf schema: one JSON kind, optionally narrowed by a validator."""

    def _notation(self, hints: bool) -> str:
        return self.kind

    def _matches(self, value: Any) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def check(self, value: Any) -> Any:
        if not self._matches(value):
            raise TypeMismatchError(self.kind, json_kind(value))
        if not self.run_validation(value):
            raise ValidationFailedError(f"Validation failed for value: {encode_json(value)}", encode_json(value))
        return value


class StringSchema(_PrimitiveSchema):
    kind = "string"

    def _matches(self, value: Any) -> bool:
        return isinstance(value, str)


class NumberSchema(_PrimitiveSchema):
    kind = "number"

    def _matches(self, value: Any) -> bool:
        # bool is an int subclass but a distinct JSON kind
        return isinstance(value, (int, float)) and not isinstance(value, bool)


class BooleanSchema(_PrimitiveSchema):
    kind = "boolean"

    def _matches(self, value: Any) -> bool:
        return isinstance(value, bool)


class ArraySchema(Schema[List[Any]]):
    """Homogeneous JSON array; every element is checked against one item schema."""

    kind = "array"

    def __init__(self, item: Schema[Any]):
        super().__init__()
        if not isinstance(item, Schema):
            raise TypeError(f"array item must be a Schema, got {type(item).__name__}")
        self._item = item

    @property
    def item(self) -> Schema[Any]:
        return self._item

    def _notation(self, hints: bool) -> str:
        inner = self._item.stringify() if hints else str(self._item)
        return f"[{inner}]"

    def check(self, value: Any) -> List[Any]:
        if not isinstance(value, list):
            raise TypeMismatchError("array", json_kind(value))
        result: List[Any] = []
        for index, element in enumerate(value):
            try:
                result.append(self._item.check(element))
            except SchemaError as exc:
                raise ArrayItemError(index, exc) from exc
        if not self.run_validation(result):
            raise ValidationFailedError("Array validation failed", encode_json(result))
        return result


class ObjectSchema(Schema[Dict[str, Any]]):
    """JSON object with a fixed, ordered set of declared fields.

    Fields are checked in declaration order and the first failure aborts the
    parse. Absent fields marked optional are left out of the result; keys
    that are not declared are ignored.
    """

    kind = "object"

    def __init__(self, shape: Mapping[str, Schema[Any]]):
        super().__init__()
        fields: Dict[str, Schema[Any]] = {}
        for key, child in shape.items():
            if not isinstance(key, str):
                raise TypeError(f"object keys must be strings, got {type(key).__name__}")
            if not isinstance(child, Schema):
                raise TypeError(f"field '{key}' must be a Schema, got {type(child).__name__}")
            fields[key] = child
        self._fields = MappingProxyType(fields)

    @property
    def fields(self) -> Mapping[str, Schema[Any]]:
        return self._fields

    def _notation(self, hints: bool) -> str:
        entries = [
            f"{key}: {child.stringify() if hints else str(child)}"
            for key, child in self._fields.items()
        ]
        return "{ " + ", ".join(entries) + " }"

    def check(self, value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise TypeMismatchError("object", json_kind(value))
        result: Dict[str, Any] = {}
        for key, child in self._fields.items():
            if key not in value:
                if child.is_optional:
                    continue
                raise MissingRequiredPropertyError(key)
            try:
                result[key] = child.check(value[key])
            except SchemaError as exc:
                raise PropertyError(key, exc) from exc
        if not self.run_validation(result):
            raise ValidationFailedError("Object validation failed", encode_json(result))
        return result


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def array(item: Schema[Any]) -> ArraySchema:
    return ArraySchema(item)


def obj(shape: Optional[Mapping[str, Schema[Any]]] = None, /, **fields: Schema[Any]) -> ObjectSchema:
    """Build an ObjectSchema from a mapping and/or keyword fields (in that order)."""
    merged: Dict[str, Schema[Any]] = dict(shape or {})
    for key, child in fields.items():
        if key in merged:
            raise ValueError(f"field '{key}' given twice")
        merged[key] = child
    return ObjectSchema(merged)


# Builder namespace: s.object(...) reads like the notation it produces.
s = SimpleNamespace(string=string, number=number, boolean=boolean, array=array, object=obj)
