from __future__ import annotations

"""Build structlm schemas from pydantic models."""

import types
from collections.abc import Sequence
from typing import Any, Dict, Literal, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel

from .schema import ArraySchema, BooleanSchema, NumberSchema, ObjectSchema, StringSchema
from .types import Schema, Validator

__all__ = ["schema_from_model"]

_LIST_ORIGINS = {list, Sequence, tuple}


def _is_integer(value: float) -> bool:
    return isinstance(value, int) or value.is_integer()


_INTEGER = Validator(_is_integer, "integer")


def _strip_none(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            raise TypeError(f"union types are not supported: {annotation!r}")
        return members[0]
    return annotation


def _literal_schema(values: tuple) -> Schema[Any]:
    if not values or not all(isinstance(v, str) for v in values):
        raise TypeError(f"only string Literal values are supported: {values!r}")
    allowed = frozenset(values)
    label = "value in [" + ", ".join(repr(v) for v in values) + "]"
    return StringSchema().validate(lambda value: value in allowed, label)


def _schema_for(annotation: Any, stack: Tuple[type, ...]) -> Schema[Any]:
    annotation = _strip_none(annotation)
    origin = get_origin(annotation)

    if origin is Literal:
        return _literal_schema(get_args(annotation))
    if origin in _LIST_ORIGINS:
        args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
        if origin is tuple and len(args) != 1:
            raise TypeError(f"only homogeneous tuples are supported: {annotation!r}")
        if not args:
            raise TypeError(f"list type needs an item type: {annotation!r}")
        return ArraySchema(_schema_for(args[0], stack))
    if isinstance(annotation, type):
        if issubclass(annotation, BaseModel):
            return _object_for(annotation, stack)
        # bool before int: bool subclasses int
        if issubclass(annotation, bool):
            return BooleanSchema()
        if issubclass(annotation, int):
            return NumberSchema().validate(_INTEGER)
        if issubclass(annotation, float):
            return NumberSchema()
        if issubclass(annotation, str):
            return StringSchema()
    raise TypeError(f"cannot express {annotation!r} as a structlm schema")


def _object_for(model_cls: Type[BaseModel], stack: Tuple[type, ...]) -> ObjectSchema:
    if model_cls in stack:
        raise TypeError(f"recursive models are not supported: {model_cls.__name__}")
    stack = stack + (model_cls,)
    shape: Dict[str, Schema[Any]] = {}
    for name, info in model_cls.model_fields.items():
        try:
            child = _schema_for(info.annotation, stack)
        except TypeError as exc:
            raise TypeError(f"{model_cls.__name__}.{name}: {exc}") from exc
        if not info.is_required():
            child.optional()
        shape[info.alias or name] = child
    return ObjectSchema(shape)


def schema_from_model(model_cls: Type[BaseModel]) -> ObjectSchema:
    """Convert a pydantic model class into an ObjectSchema.

    Field order follows the model definition. Fields with a default become
    optional, and aliases (when set) are used as JSON keys.
    """

    if not (isinstance(model_cls, type) and issubclass(model_cls, BaseModel)):
        raise TypeError("model_cls must be a pydantic BaseModel subclass")
    return _object_for(model_cls, ())
