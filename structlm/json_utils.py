from __future__ import annotations

import json
import logging
import math
import re
from typing import TYPE_CHECKING, Any, List, Optional, Tuple, TypeVar

from .config import load_runtime_settings
from .errors import InvalidJsonError
from .telemetry import timed

if TYPE_CHECKING:  # pragma: no cover
    from .types import Schema

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.IGNORECASE | re.DOTALL)
_REASONING_TAG_RE = re.compile(
    r"<(?P<tag>think|thinking|thought|reasoning|reflection|scratchpad)>(.*?)</\s*(?P=tag)\s*>",
    re.IGNORECASE | re.DOTALL,
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def decode_json(text: Any, *, allow_nan: Optional[bool] = None) -> Any:
    """Decode one JSON document, raising InvalidJsonError on any syntax problem.

    Unless ``allow_nan`` is set, the NaN/Infinity literals are refused, and so
    are well-formed numbers that overflow a float (``1e400``), reported as
    "number ... is out of range".
    """

    if not isinstance(text, (str, bytes, bytearray)):
        raise InvalidJsonError(f"expected JSON text, got {type(text).__name__}")
    if allow_nan is None:
        allow_nan = load_runtime_settings().allow_nan
    kwargs = {} if allow_nan else {"parse_constant": _reject_constant, "parse_float": _finite_float}
    try:
        return json.loads(text, **kwargs)
    except RecursionError as exc:
        raise InvalidJsonError("document is nested too deeply") from exc
    except ValueError as exc:
        raise InvalidJsonError(str(exc)) from exc


def encode_json(value: Any) -> str:
    """Compact JSON text for a decoded value, used in error messages."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _strip_reasoning_sections(text: str) -> str:
    """Drop reasoning wrappers such as <think>...</think> before parsing."""

    cleaned = text
    while True:
        updated = _REASONING_TAG_RE.sub("", cleaned)
        if updated == cleaned:
            return cleaned
        cleaned = updated


def strip_markdown_json(text: str) -> str:
    """Remove Markdown fences and discard text outside the first JSON block."""

    if text is None:
        raise ValueError("Input text must not be None")
    trimmed = text.strip()
    if not trimmed:
        raise ValueError("Input text must not be empty")

    trimmed = _strip_reasoning_sections(trimmed).strip()

    match = _FENCE_RE.search(trimmed)
    if match:
        trimmed = match.group(1).strip()

    starts = [idx for idx in (trimmed.find("{"), trimmed.find("[")) if idx != -1]
    if not starts:
        raise ValueError("No JSON object/array found in text")
    start_idx = min(starts)
    end_char = "}" if trimmed[start_idx] == "{" else "]"
    end_idx = trimmed.rfind(end_char)
    if end_idx < start_idx:
        raise ValueError("Malformed JSON payload")
    return trimmed[start_idx : end_idx + 1]


def parse_reply(
    raw_text: str,
    schema: "Schema[T]",
    *,
    repair: Optional[bool] = None,
) -> Tuple[T, List[str]]:
    """Parse a model reply against ``schema``, returning the value and warnings.

    The reply is first parsed as-is. If it is not valid JSON and repair is
    enabled, Markdown fences and reasoning tags are stripped and the first
    JSON block is parsed instead (warning ``json_repaired_simple``). Schema
    failures are never repaired.
    """

    if repair is None:
        repair = load_runtime_settings().repair_replies
    warnings: List[str] = []
    with timed("parse_reply", {"schema": type(schema).__name__}) as record:
        try:
            return schema.parse(raw_text), warnings
        except InvalidJsonError as exc:
            if not repair or not isinstance(raw_text, str):
                logger.debug("reply is not valid JSON: %s", exc.detail)
                raise
            try:
                cleaned = strip_markdown_json(raw_text)
            except ValueError as strip_exc:
                logger.debug("no JSON block found in reply: %s", strip_exc)
                raise exc from strip_exc
        value = schema.parse(cleaned)
        warnings.append("json_repaired_simple")
        record["repaired"] = True
        logger.info("repaired model reply before parsing (%d -> %d chars)", len(raw_text), len(cleaned))
        return value, warnings


__all__ = ["decode_json", "encode_json", "strip_markdown_json", "parse_reply"]
