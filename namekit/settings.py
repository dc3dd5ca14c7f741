#!/usr/bin/env python3
"""
Settings loader for namekit (configs/app.yaml).

Two kinds of relative path exist. Data shipped with the package, such as
the bundled corpus, lives under the package directory and is resolved
with data_path(), so it is found after a normal install. Paths typed by
the user, or output files, are resolved with user_path() against the
current working directory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_DIR / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    return yaml.safe_load(APP_CONFIG_PATH.read_text(encoding="utf-8")) or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def require_setting(path: str) -> Any:
    """Like get_setting, but a missing or null value is a configuration error."""
    value = get_setting(path)
    if value is None:
        raise ValueError(f"{path} must be set in app.yaml")
    return value


def resolve_path(value: str | os.PathLike, base: Path) -> Path:
    """Expand ~ and anchor a relative path at base; absolute paths are kept."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = base / path
    return path


def data_path(value: str | os.PathLike) -> Path:
    """Path to package data named in app.yaml."""
    return resolve_path(value, PACKAGE_DIR)


def user_path(value: str | os.PathLike) -> Path:
    """Path given on the command line (or an output file), from the cwd."""
    return resolve_path(value, Path.cwd())


__all__ = [
    "load_app_config",
    "get_setting",
    "require_setting",
    "resolve_path",
    "data_path",
    "user_path",
    "PACKAGE_DIR",
    "APP_CONFIG_PATH",
]
