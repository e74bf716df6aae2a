"""Compact, LLM-readable schemas with matching JSON parse-validation."""

from .errors import (
    ArrayItemError,
    InvalidJsonError,
    MissingRequiredPropertyError,
    PropertyError,
    SchemaError,
    TypeMismatchError,
    ValidationFailedError,
)
from .json_utils import parse_reply, strip_markdown_json
from .schema import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    StringSchema,
    array,
    boolean,
    number,
    obj,
    s,
    string,
)
from .types import JsonValue, Schema, Validator, validator

__all__ = [
    "s",
    "string",
    "number",
    "boolean",
    "array",
    "obj",
    "Schema",
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "ArraySchema",
    "ObjectSchema",
    "Validator",
    "validator",
    "JsonValue",
    "SchemaError",
    "InvalidJsonError",
    "TypeMismatchError",
    "MissingRequiredPropertyError",
    "ValidationFailedError",
    "ArrayItemError",
    "PropertyError",
    "parse_reply",
    "strip_markdown_json",
]
