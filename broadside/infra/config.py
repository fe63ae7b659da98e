"""Env file discovery and parsing for ``BROADSIDE_*`` settings."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from broadside.infra.app_data import PROJECT_ROOT

# Later files win.
DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env",
    "appdata/config/.env.local",
    ".env",
    ".env.local",
)

_QUOTES = {"'", '"'}


def parse_env_text(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines, skipping blanks, comments and lines without a key."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
            value = value[1:-1]
        values[key] = value
    return values


def resolve_env_path(path: str | Path) -> Path:
    """Resolve relative paths against the working directory, then the project root."""
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        return candidate
    return PROJECT_ROOT / candidate


def load_env_file(path: str | Path = ".env", *, override_existing: bool = True) -> dict[str, str]:
    """Export one env file into the process environment.

    Returns the pairs actually written; a missing file writes nothing.
    """
    env_path = resolve_env_path(path)
    if not env_path.is_file():
        return {}
    written: dict[str, str] = {}
    for key, value in parse_env_text(env_path.read_text(encoding="utf-8")).items():
        if override_existing or key not in os.environ:
            os.environ[key] = value
            written[key] = value
    return written


def load_default_env_files(
    *, override_existing: bool = True, paths: Iterable[str | Path] | None = None
) -> dict[str, str]:
    """Load env files in order and return the merged pairs written."""
    written: dict[str, str] = {}
    for path in DEFAULT_ENV_FILES if paths is None else paths:
        written.update(load_env_file(path, override_existing=override_existing))
    return written
