from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

from .json_utils import decode_json

__all__ = [
    "JsonValue",
    "Schema",
    "Validator",
    "json_kind",
    "render_hinted",
    "validator",
]

JsonValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]

T = TypeVar("T")


@dataclass(frozen=True)
class Validator(Generic[T]):
    """Custom predicate paired with the text shown for it in prompts."""

    predicate: Callable[[T], bool]
    label: str

    def __post_init__(self) -> None:
        if not callable(self.predicate):
            raise TypeError("predicate must be callable")
        if not isinstance(self.label, str) or not self.label.strip():
            raise ValueError("label must be a non-empty string")
        if "*/" in self.label:
            raise ValueError("label must not contain '*/', it would close the hint comment")

    def __call__(self, value: T) -> bool:
        return bool(self.predicate(value))

    @classmethod
    def coerce(cls, fn: Union["Validator[T]", Callable[[T], bool]], label: Optional[str] = None) -> "Validator[T]":
        """Build a Validator from a callable, using ``label`` or the function name."""

        if isinstance(fn, Validator):
            return fn if label is None else cls(fn.predicate, label)
        if not callable(fn):
            raise TypeError("validator must be callable")
        if label is None:
            name = getattr(fn, "__name__", "")
            if not name or name == "<lambda>":
                raise TypeError("lambda validators need an explicit display label")
            label = name
        return cls(fn, label)


def validator(label: str) -> Callable[[Callable[[T], bool]], Validator[T]]:
    """Decorator turning a predicate function into a labelled Validator.

        @validator("value > 0")
        def positive(value):
            return value > 0
    """

    def wrap(fn: Callable[[T], bool]) -> Validator[T]:
        return Validator(fn, label)

    return wrap


def json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def render_hinted(base: str, label: Optional[str], optional: bool) -> str:
    """Append the ``/* hint, optional */`` comment shared by every schema kind."""

    hints: List[str] = []
    if label is not None:
        hints.append(label)
    if optional:
        hints.append("optional")
    if not hints:
        return base
    return f"{base} /* {', '.join(hints)} */"


class Schema(ABC, Generic[T]):
    """Descriptor of one JSON-shaped type.

    Subclasses provide the notation for their own kind and the structural
    check of a decoded value; validation hints, optionality and the
    decode-then-check entry point live here.
    """

    kind: str = "schema"

    def __init__(self) -> None:
        self.validator: Optional[Validator[T]] = None
        self.is_optional: bool = False

    def validate(self, fn: Union[Validator[T], Callable[[T], bool]], label: Optional[str] = None) -> "Schema[T]":
        self.validator = Validator.coerce(fn, label)
        return self

    def optional(self, flag: bool = True) -> "Schema[T]":
        self.is_optional = bool(flag)
        return self

    def run_validation(self, value: T) -> bool:
        return self.validator(value) if self.validator is not None else True

    @abstractmethod
    def _notation(self, hints: bool) -> str:  # pragma: no cover - abstract
        ...

    @abstractmethod
    def check(self, value: Any) -> T:  # pragma: no cover - abstract
        """Validate an already-decoded JSON value and return the typed result."""

    def stringify(self) -> str:
        label = self.validator.label if self.validator is not None else None
        return render_hinted(self._notation(True), label, self.is_optional)

    def parse(self, text: str) -> T:
        return self.check(decode_json(text))

    def __str__(self) -> str:
        return self._notation(False)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.stringify()}>"
