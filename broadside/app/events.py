"""Events published by the controller for presentation collaborators."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.core.models import Difficulty, Shooter, TurnRecord


@dataclass(frozen=True, slots=True)
class GameStarted:
    difficulty: Difficulty


@dataclass(frozen=True, slots=True)
class TurnResolved:
    """A shot was resolved and appended to the turn log."""

    record: TurnRecord


@dataclass(frozen=True, slots=True)
class GameFinished:
    winner: Shooter
    turns: int


@dataclass(frozen=True, slots=True)
class MatchReset:
    """Match discarded; controller is back in setup."""
