"""Game settings sourced from environment."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from broadside.core.models import BOARD_SIZE, DEFAULT_DIFFICULTY, Difficulty
from broadside.infra.config import DEFAULT_ENV_FILES, load_default_env_files

DEFAULT_OPPONENT_DELAY_MS = 600


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Immutable match configuration."""

    difficulty: Difficulty = DEFAULT_DIFFICULTY
    opponent_delay_seconds: float = DEFAULT_OPPONENT_DELAY_MS / 1000
    seed: int | None = None
    board_size: int = BOARD_SIZE


def load_game_settings(
    *, env_files: Iterable[str | Path] | None = DEFAULT_ENV_FILES
) -> GameSettings:
    """Load settings from ``BROADSIDE_*`` env vars, tolerating bad values.

    ``env_files`` are exported first without overriding variables already set;
    pass ``None`` to read the process environment only.
    """
    if env_files is not None:
        load_default_env_files(override_existing=False, paths=env_files)
    delay_ms = max(0, _int("BROADSIDE_OPPONENT_DELAY_MS", DEFAULT_OPPONENT_DELAY_MS))
    return GameSettings(
        difficulty=Difficulty.parse(os.getenv("BROADSIDE_DIFFICULTY")),
        opponent_delay_seconds=delay_ms / 1000,
        seed=_optional_int("BROADSIDE_SEED"),
    )
