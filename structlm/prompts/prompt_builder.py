from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Any, Optional

from structlm.types import Schema

__all__ = [
    "PromptParts",
    "PromptTemplateError",
    "build_prompt",
]

_DEFAULT_TASK = "Extract the information from the input text and format it according to the schema."


class PromptTemplateError(RuntimeError):
    """Raised when a requested prompt resource cannot be located."""


@dataclass(frozen=True)
class PromptParts:
    """Container for the system + user prompt pair sent to a model."""

    system: str
    user: str

    @property
    def char_count(self) -> int:
        return len(self.system) + len(self.user)


@lru_cache(maxsize=None)
def _load_text(relative_path: str) -> str:
    """Read and cache prompt text from the package resources."""

    base = resources.files("structlm.prompts")
    target = base.joinpath(relative_path)
    if not target.is_file():
        raise PromptTemplateError(f"Missing prompt template: {relative_path}")
    return target.read_text(encoding="utf-8").strip()


def _compose_system_text(category: str, *, hints: bool) -> str:
    parts = [_load_text(f"{category}/shared_v1.md")]
    if hints:
        parts.append(_load_text(f"{category}/hints_v1.md"))
    return "\n\n".join(part for part in parts if part).strip()


def build_prompt(
    schema: Schema[Any],
    input_text: str,
    *,
    task: Optional[str] = None,
    hints: bool = True,
) -> PromptParts:
    """Construct the extraction prompt for ``schema``.

    With ``hints`` the schema is rendered with its validation/optional
    comments; without, only the bare type notation is shown.
    """

    if not isinstance(schema, Schema):
        raise TypeError(f"schema must be a Schema, got {type(schema).__name__}")
    system = _compose_system_text("extract", hints=hints)
    notation = schema.stringify() if hints else str(schema)
    user = (
        f"{(task or _DEFAULT_TASK).strip()}\n\n"
        f"Input text: {input_text.strip()}\n\n"
        "Please respond with JSON that matches this structure:\n"
        f"{notation}\n\n"
        "Return only the JSON, no additional text."
    )
    return PromptParts(system=system, user=user)
