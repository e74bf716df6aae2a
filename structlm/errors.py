from __future__ import annotations

"""Failures raised while parsing a document against a schema."""

from typing import Tuple, Union

__all__ = [
    "SchemaError",
    "InvalidJsonError",
    "TypeMismatchError",
    "MissingRequiredPropertyError",
    "ValidationFailedError",
    "ArrayItemError",
    "PropertyError",
]

PathElement = Union[str, int]


class SchemaError(ValueError):
    """Base class for every parse/validation failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def path(self) -> Tuple[PathElement, ...]:
        """Keys and indices leading to the failing value (empty at the root)."""
        return ()

    @property
    def root_cause(self) -> "SchemaError":
        return self


class InvalidJsonError(SchemaError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid JSON: {detail}")
        self.detail = detail


class TypeMismatchError(SchemaError):
    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class MissingRequiredPropertyError(SchemaError):
    def __init__(self, key: str):
        super().__init__(f"Missing required property: {key}")
        self.key = key


class ValidationFailedError(SchemaError):
    def __init__(self, message: str, value_json: str):
        super().__init__(message)
        self.value_json = value_json


class _WrappedError(SchemaError):
    """Positional context around an inner failure."""

    def __init__(self, prefix: str, element: PathElement, error: SchemaError):
        super().__init__(f"{prefix}: {error.message}")
        self.error = error
        self._element = element

    @property
    def path(self) -> Tuple[PathElement, ...]:
        return (self._element,) + self.error.path

    @property
    def root_cause(self) -> SchemaError:
        return self.error.root_cause


class ArrayItemError(_WrappedError):
    def __init__(self, index: int, error: SchemaError):
        super().__init__(f"Array item at index {index}", index, error)
        self.index = index


class PropertyError(_WrappedError):
    def __init__(self, key: str, error: SchemaError):
        super().__init__(f"Property '{key}'", key, error)
        self.key = key
