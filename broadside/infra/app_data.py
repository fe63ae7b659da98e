"""Broadside app-data paths."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True, slots=True)
class AppDataPaths:
    """Resolved runtime directories."""

    root: Path
    logs: Path


def _env_dir(name: str, base: Path) -> Path | None:
    configured = os.getenv(name, "").strip()
    if not configured:
        return None
    candidate = Path(configured)
    return candidate if candidate.is_absolute() else base / candidate


def resolve_app_data_root() -> Path:
    """``BROADSIDE_APP_DATA_DIR``, relative to the project root, else ``<root>/appdata``."""
    return _env_dir("BROADSIDE_APP_DATA_DIR", PROJECT_ROOT) or PROJECT_ROOT / "appdata"


def resolve_logs_dir() -> Path:
    """``BROADSIDE_LOG_DIR``, relative to the app-data root, else ``<app data>/logs``."""
    root = resolve_app_data_root()
    return _env_dir("BROADSIDE_LOG_DIR", root) or root / "logs"


def ensure_app_data_dirs() -> AppDataPaths:
    """Create the app-data and log directories and return them."""
    paths = AppDataPaths(root=resolve_app_data_root(), logs=resolve_logs_dir())
    paths.root.mkdir(parents=True, exist_ok=True)
    paths.logs.mkdir(parents=True, exist_ok=True)
    return paths
