# config/loader.py
from __future__ import annotations

import copy
import tomllib
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.toml"

DEFAULTS: Dict[str, Any] = {
    "store": {"backend": "sqlite", "path": "data/freshbite.sqlite"},
    "logging": {"level": "INFO"},
    "categorizer": {"tables": ""},
    "expiry": {"critical_days": 3, "warning_days": 7},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(config_path: Path | None = None) -> Dict[str, Any]:
    """
    Load config.toml (repo root by default) over the built-in defaults.
    An explicitly given path must exist; the default one is optional.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return copy.deepcopy(DEFAULTS)
    elif not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        return _merge(DEFAULTS, tomllib.load(f))
