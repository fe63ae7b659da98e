"""Discrete commands accepted by the turn controller."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.ai.memory import AIMemory
from broadside.core.models import BoardState, Coord, Difficulty


@dataclass(frozen=True, slots=True)
class ResetToSetup:
    """Discard the match and return to setup, keeping difficulty."""


@dataclass(frozen=True, slots=True)
class SetDifficulty:
    difficulty: Difficulty


@dataclass(frozen=True, slots=True)
class RandomizePlayerFleet:
    seed: int


@dataclass(frozen=True, slots=True)
class SetPlayerBoard:
    board: BoardState


@dataclass(frozen=True, slots=True)
class StartGame:
    """Begin play; ``seed`` drives the opponent fleet layout."""

    seed: int


@dataclass(frozen=True, slots=True)
class PlayerFire:
    coord: Coord


@dataclass(frozen=True, slots=True)
class OpponentShotResolved:
    """Opponent's chosen coordinate plus the memory returned by its strategy."""

    coord: Coord
    memory: AIMemory


@dataclass(frozen=True, slots=True)
class ToggleHistory:
    """Open or close the history panel."""


@dataclass(frozen=True, slots=True)
class SetHistoryCursor:
    turn: int | None


GameAction = (
    ResetToSetup
    | SetDifficulty
    | RandomizePlayerFleet
    | SetPlayerBoard
    | StartGame
    | PlayerFire
    | OpponentShotResolved
    | ToggleHistory
    | SetHistoryCursor
)
