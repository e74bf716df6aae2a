from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import json
import os

import yaml

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class RuntimeSettings:
    # Accept NaN/Infinity literals, which standard JSON forbids.
    allow_nan: bool = field(default_factory=lambda: _env_flag("STRUCTLM_ALLOW_NAN", "0"))
    # Strip Markdown fences / reasoning tags from model replies before giving up.
    repair_replies: bool = field(default_factory=lambda: _env_flag("STRUCTLM_REPAIR_REPLIES", "1"))
    log_level: str = field(default_factory=lambda: os.getenv("STRUCTLM_LOG_LEVEL", "WARNING").upper())


def load_runtime_settings() -> RuntimeSettings:
    """Return settings derived from the current environment."""
    return RuntimeSettings()


def load_settings(path: str | Path) -> RuntimeSettings:
    """Load settings overrides from a YAML or JSON file on top of the environment."""
    p = Path(path)
    data = yaml.safe_load(p.read_text()) if p.suffix in {".yaml", ".yml"} else json.loads(p.read_text())
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {p}")
    known = {f.name for f in fields(RuntimeSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings in {p}: {', '.join(unknown)}")
    settings = replace(load_runtime_settings(), **data)
    return replace(settings, log_level=str(settings.log_level).upper())
