from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

log = logging.getLogger("structlm.telemetry")


@contextmanager
def timed(stage: str, ctx: Dict[str, Any] | None = None) -> Iterator[Dict[str, Any]]:
    """Log elapsed ms and outcome (``ok`` or the exception name) for a stage.

    The yielded dict is merged into the log record, so callers can attach
    details discovered while the stage runs.
    """
    payload: Dict[str, Any] = {"stage": stage, **(ctx or {})}
    start = time.perf_counter()
    try:
        yield payload
    except Exception as exc:
        payload["outcome"] = type(exc).__name__
        raise
    else:
        payload.setdefault("outcome", "ok")
    finally:
        payload["ms"] = int((time.perf_counter() - start) * 1000)
        log.debug("%s finished in %sms (%s)", stage, payload["ms"], payload.get("outcome"), extra=payload)


def est_tokens(char_count: int) -> int:
    """Rough prompt token estimate (4 chars/token) for comparing notations."""
    if char_count <= 0:
        return 0
    return max(1, round(char_count / 4))
